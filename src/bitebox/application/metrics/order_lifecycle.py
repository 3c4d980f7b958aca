from __future__ import annotations

from prometheus_client import Counter, Gauge

from bitebox.domain.order.entities import Order, OrderStatus

ORDERS_PLACED_TOTAL = Counter(
    "bitebox_orders_placed_total",
    "Total number of orders placed by payment method and payment status.",
    ["payment_method", "payment_status"],
)

ORDER_REJECTIONS_TOTAL = Counter(
    "bitebox_order_rejections_total",
    "Total number of rejected order placements by error type.",
    ["reason"],
)

WALLET_DEBITS_TOTAL = Counter(
    "bitebox_wallet_debits_total",
    "Total number of wallet debits by outcome.",
    ["outcome"],
)

ORDER_TRANSITION_TOTAL = Counter(
    "bitebox_order_transition_total",
    "Total number of order lifecycle transitions.",
    ["from", "to"],
)

NOTIFICATIONS_TOTAL = Counter(
    "bitebox_notifications_total",
    "Total number of push notifications by type and outcome.",
    ["type", "outcome"],
)

WS_REGISTRATIONS = Gauge(
    "bitebox_ws_registrations",
    "Current number of registered websocket connections.",
)


def record_order_placed(order: Order) -> None:
    ORDERS_PLACED_TOTAL.labels(
        payment_method=order.payment_method.value,
        payment_status=order.payment_status.value,
    ).inc()


def record_order_rejected(reason: str) -> None:
    ORDER_REJECTIONS_TOTAL.labels(reason=reason).inc()


def record_wallet_debit(outcome: str) -> None:
    WALLET_DEBITS_TOTAL.labels(outcome=outcome).inc()


def record_transition(from_status: OrderStatus, to_status: OrderStatus) -> None:
    ORDER_TRANSITION_TOTAL.labels(**{"from": from_status.value, "to": to_status.value}).inc()


def record_notification(notification_type: str, outcome: str) -> None:
    NOTIFICATIONS_TOTAL.labels(type=notification_type, outcome=outcome).inc()


def record_ws_registrations(count: int) -> None:
    WS_REGISTRATIONS.set(count)
