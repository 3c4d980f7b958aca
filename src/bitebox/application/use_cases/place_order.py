from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from bitebox.application.dto.requests import PlaceOrderRequest
from bitebox.application.dto.responses import OrderResponse
from bitebox.application.errors import ApplicationError, PersistenceError
from bitebox.application.metrics.order_lifecycle import record_order_placed, record_order_rejected
from bitebox.application.ports.repositories import (
    AccountRepository,
    MenuRepository,
    OrderRepository,
)
from bitebox.application.use_cases.context import CallerIdentity, TraceContext
from bitebox.application.use_cases.notification_dispatcher import NotificationDispatcher
from bitebox.application.use_cases.order_details import OrderDetailsLoader
from bitebox.application.use_cases.order_validation import OrderValidator
from bitebox.application.use_cases.payment_settlement import PaymentSettlement
from bitebox.domain.common.ids import OrderId
from bitebox.domain.order.entities import create_order
from bitebox.domain.order.events import NotificationType, OrderNotification

logger = logging.getLogger(__name__)


class PlaceOrder:
    """Validate, settle payment, persist once, then notify both parties."""

    def __init__(
        self,
        account_repository: AccountRepository,
        menu_repository: MenuRepository,
        order_repository: OrderRepository,
        dispatcher: NotificationDispatcher,
    ) -> None:
        self._validator = OrderValidator(
            account_repository=account_repository,
            menu_repository=menu_repository,
        )
        self._settlement = PaymentSettlement(account_repository=account_repository)
        self._details = OrderDetailsLoader(
            account_repository=account_repository,
            menu_repository=menu_repository,
        )
        self._order_repository = order_repository
        self._dispatcher = dispatcher

    def execute(
        self,
        caller: CallerIdentity,
        request_dto: PlaceOrderRequest,
        trace_ctx: TraceContext,
    ) -> OrderResponse:
        user_id = caller.account_id
        try:
            validated = self._validator.validate(request_dto)
            outcome = self._settlement.settle(
                user_id=user_id,
                payment_method=validated.payment_method,
                total=validated.total,
            )
        except ApplicationError as exc:
            record_order_rejected(type(exc).__name__)
            raise

        order = create_order(
            order_id=OrderId(f"ord_{uuid4().hex[:12]}"),
            user_id=user_id,
            vendor_id=validated.vendor.account_id,
            user_phone_number=outcome.user_phone_number,
            lines=validated.lines,
            payment_method=validated.payment_method,
            payment_status=outcome.payment_status,
            now=datetime.now(timezone.utc),
        )
        try:
            self._order_repository.add(order)
        except Exception as exc:
            logger.exception(
                "order_persist_failed",
                extra={"user_id": str(user_id), "order_id": str(order.order_id)},
            )
            try:
                self._settlement.compensate(user_id, outcome)
            except Exception:
                logger.exception(
                    "wallet_compensation_failed",
                    extra={"user_id": str(user_id), "order_id": str(order.order_id)},
                )
            raise PersistenceError("order could not be saved") from exc

        record_order_placed(order)
        logger.info(
            "order_placed",
            extra={
                "order_id": str(order.order_id),
                "user_id": str(order.user_id),
                "vendor_id": str(order.vendor_id),
                "payment_method": order.payment_method.value,
                "payment_status": order.payment_status.value,
                "trace_id": trace_ctx.trace_id,
            },
        )

        response = self._details.load(order)

        self._dispatcher.notify(
            order.user_id,
            OrderNotification(
                type=NotificationType.ORDER_CONFIRMATION,
                message=f"Your order {order.order_id} has been placed successfully.",
                order_id=order.order_id,
            ),
        )
        self._dispatcher.notify(
            order.vendor_id,
            OrderNotification(
                type=NotificationType.NEW_ORDER,
                message=f"New order {order.order_id} received.",
                order_id=order.order_id,
            ),
        )
        return response
