from __future__ import annotations

import logging
from datetime import datetime, timezone

from bitebox.application.dto.responses import OrderResponse
from bitebox.application.errors import (
    InvalidOrderTransitionError,
    OrderAccessDeniedError,
    OrderConflictError,
    OrderNotFoundError,
)
from bitebox.application.metrics.order_lifecycle import record_transition
from bitebox.application.ports.repositories import (
    AccountRepository,
    MenuRepository,
    OptimisticConcurrencyError,
    OrderRepository,
)
from bitebox.application.use_cases.context import CallerIdentity
from bitebox.application.use_cases.notification_dispatcher import NotificationDispatcher
from bitebox.application.use_cases.order_details import OrderDetailsLoader
from bitebox.domain.common.ids import AccountId, OrderId
from bitebox.domain.order.entities import Order, OrderStatus, OrderTransitionError
from bitebox.domain.order.events import NotificationType, OrderNotification

logger = logging.getLogger(__name__)


class _OrderTransition:
    def __init__(
        self,
        order_repository: OrderRepository,
        account_repository: AccountRepository,
        menu_repository: MenuRepository,
        dispatcher: NotificationDispatcher,
    ) -> None:
        self._order_repository = order_repository
        self._details = OrderDetailsLoader(
            account_repository=account_repository,
            menu_repository=menu_repository,
        )
        self._dispatcher = dispatcher

    def _load(self, order_id: OrderId) -> Order:
        order = self._order_repository.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"order {order_id} not found")
        return order

    def _persist(self, order: Order, target: Order) -> tuple[Order, bool]:
        try:
            updated = self._order_repository.update_status_with_version(
                order_id=order.order_id,
                new_status=target.status,
                expected_version=order.version,
                updated_at=target.updated_at,
            )
        except OptimisticConcurrencyError:
            current = self._load(order.order_id)
            if current.status == target.status:
                return current, False
            raise OrderConflictError(f"order {order.order_id} status update conflict")
        return updated, True

    def _announce(self, before: Order, after: Order, recipient_id: AccountId) -> None:
        record_transition(from_status=before.status, to_status=after.status)
        logger.info(
            "order_status_changed",
            extra={
                "order_id": str(after.order_id),
                "from_status": before.status.value,
                "to_status": after.status.value,
            },
        )
        self._dispatcher.notify(
            recipient_id,
            OrderNotification(
                type=NotificationType.ORDER_STATUS_UPDATED,
                message=f"Order {after.order_id} is now {after.status.value.replace('_', ' ')}.",
                order_id=after.order_id,
                status=after.status.value,
            ),
        )


class AdvanceOrderStatus(_OrderTransition):
    """Moves an order one step along pending, in_progress, out_for_delivery, delivered."""

    def execute(self, order_id: OrderId, caller: CallerIdentity) -> OrderResponse:
        order = self._load(order_id)
        if str(order.vendor_id) != str(caller.account_id):
            raise OrderAccessDeniedError("only the order's vendor can advance its status")

        try:
            advanced = order.advance(now=datetime.now(timezone.utc))
        except OrderTransitionError as exc:
            raise InvalidOrderTransitionError(str(exc)) from exc

        persisted, applied = self._persist(order, advanced)
        if applied:
            self._announce(order, persisted, recipient_id=order.user_id)
        return self._details.load(persisted)


class CancelOrder(_OrderTransition):
    def execute(self, order_id: OrderId, caller: CallerIdentity) -> OrderResponse:
        order = self._load(order_id)
        if not order.involves(caller.account_id):
            raise OrderAccessDeniedError("only the order's user or vendor can cancel it")

        if order.status == OrderStatus.CANCELLED:
            return self._details.load(order)
        try:
            cancelled = order.cancel(now=datetime.now(timezone.utc))
        except OrderTransitionError as exc:
            raise InvalidOrderTransitionError(str(exc)) from exc

        persisted, applied = self._persist(order, cancelled)
        if applied:
            counterpart = (
                order.vendor_id
                if str(caller.account_id) == str(order.user_id)
                else order.user_id
            )
            self._announce(order, persisted, recipient_id=counterpart)
        return self._details.load(persisted)
