from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from bitebox.domain.common.ids import OrderId


class NotificationType(str, Enum):
    ORDER_CONFIRMATION = "ORDER_CONFIRMATION"
    NEW_ORDER = "NEW_ORDER"
    ORDER_STATUS_UPDATED = "ORDER_STATUS_UPDATED"


@dataclass(frozen=True)
class OrderNotification:
    type: NotificationType
    message: str
    order_id: OrderId
    status: str | None = None
