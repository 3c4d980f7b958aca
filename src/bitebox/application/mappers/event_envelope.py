from __future__ import annotations

import json
from typing import Any

from bitebox.domain.order.events import OrderNotification


def serialize_notification(notification: OrderNotification) -> str:
    payload: dict[str, Any] = {
        "type": notification.type.value,
        "message": notification.message,
        "orderId": str(notification.order_id),
    }
    if notification.status is not None:
        payload["status"] = notification.status
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def registration_ack(user_id: str) -> str:
    return json.dumps({"type": "REGISTERED", "userId": user_id}, separators=(",", ":"))
