from __future__ import annotations

import logging

from bitebox.application.mappers.event_envelope import serialize_notification
from bitebox.application.metrics.order_lifecycle import record_notification
from bitebox.application.ports.push import PushTransport
from bitebox.domain.common.ids import AccountId
from bitebox.domain.order.events import OrderNotification

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Best-effort push of order events to connected recipients.

    Nothing is queued or retried: a recipient that is not connected observes
    the change through later queries. Transport failures are logged and
    swallowed so they never affect the caller.
    """

    def __init__(self, transport: PushTransport) -> None:
        self._transport = transport

    def notify(self, recipient_id: AccountId, notification: OrderNotification) -> bool:
        log_extra = {
            "recipient_id": str(recipient_id),
            "order_id": str(notification.order_id),
            "event_type": notification.type.value,
        }
        try:
            message = serialize_notification(notification)
            delivered = self._transport.push(str(recipient_id), message)
        except Exception:
            record_notification(notification.type.value, "error")
            logger.exception("notification_push_failed", extra=log_extra)
            return False

        if delivered:
            record_notification(notification.type.value, "sent")
            logger.info("notification_pushed", extra=log_extra)
        else:
            record_notification(notification.type.value, "dropped")
            logger.info("notification_dropped", extra=log_extra)
        return delivered
