from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from bitebox.domain.common.ids import AccountId, MenuItemId, OrderId
from bitebox.domain.common.money import Money


class OrderStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATUSES


ACTIVE_STATUSES = frozenset(
    {OrderStatus.PENDING, OrderStatus.IN_PROGRESS, OrderStatus.OUT_FOR_DELIVERY}
)
_TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})

_NEXT_STATUS: dict[OrderStatus, OrderStatus] = {
    OrderStatus.PENDING: OrderStatus.IN_PROGRESS,
    OrderStatus.IN_PROGRESS: OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.OUT_FOR_DELIVERY: OrderStatus.DELIVERED,
}


class PaymentMethod(str, Enum):
    WALLET = "wallet"
    CASH_ON_DELIVERY = "cash_on_delivery"

    @classmethod
    def parse(cls, raw: str) -> PaymentMethod | None:
        normalized = raw.strip().lower().replace(" ", "_")
        for method in cls:
            if method.value == normalized:
                return method
        return None


class PaymentStatus(str, Enum):
    PAID = "paid"
    UNPAID = "unpaid"


@dataclass(frozen=True)
class OrderLine:
    menu_item_id: MenuItemId
    name: str
    quantity: int
    unit_price: Money

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")

    @property
    def line_total(self) -> Money:
        return self.unit_price.times(self.quantity)


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    user_id: AccountId
    vendor_id: AccountId
    user_phone_number: str | None
    lines: list[OrderLine]
    total: Money
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    status: OrderStatus
    created_at: datetime
    updated_at: datetime
    version: int = 1

    def __post_init__(self) -> None:
        if not self.lines:
            raise ValueError("order must contain at least one line")
        expected_total = sum(line.line_total.amount_cents for line in self.lines)
        if self.total.amount_cents != expected_total:
            raise ValueError("order total must equal sum of line totals")
        if (
            self.payment_status == PaymentStatus.PAID
            and self.payment_method != PaymentMethod.WALLET
        ):
            raise ValueError("only wallet orders can be created as paid")

    def involves(self, account_id: AccountId) -> bool:
        return str(account_id) in {str(self.user_id), str(self.vendor_id)}

    def advance(self, now: datetime) -> Order:
        next_status = _NEXT_STATUS.get(self.status)
        if next_status is None:
            raise OrderTransitionError(f"cannot advance order from status={self.status.value}")
        return replace(self, status=next_status, updated_at=now)

    def cancel(self, now: datetime) -> Order:
        if self.status.is_terminal:
            raise OrderTransitionError(f"cannot cancel order from status={self.status.value}")
        return replace(self, status=OrderStatus.CANCELLED, updated_at=now)


def order_total(lines: list[OrderLine]) -> Money:
    return Money(amount_cents=sum(line.line_total.amount_cents for line in lines))


def create_order(
    order_id: OrderId,
    user_id: AccountId,
    vendor_id: AccountId,
    user_phone_number: str | None,
    lines: list[OrderLine],
    payment_method: PaymentMethod,
    payment_status: PaymentStatus,
    now: datetime,
) -> Order:
    if not lines:
        raise ValueError("order must contain at least one line")

    return Order(
        order_id=order_id,
        user_id=user_id,
        vendor_id=vendor_id,
        user_phone_number=user_phone_number,
        lines=lines,
        total=order_total(lines),
        payment_method=payment_method,
        payment_status=payment_status,
        status=OrderStatus.IN_PROGRESS,
        created_at=now,
        updated_at=now,
    )


class OrderTransitionError(Exception):
    pass
