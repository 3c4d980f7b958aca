from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from bitebox.application.dto.requests import PlaceOrderRequest
from bitebox.application.errors import (
    InvalidMenuItemError,
    InvalidOrderRequestError,
    MissingFieldsError,
    TotalMismatchError,
    UnsupportedPaymentMethodError,
    VendorNotFoundError,
)
from bitebox.application.ports.repositories import AccountRepository, MenuRepository
from bitebox.domain.account.entities import Account
from bitebox.domain.common.ids import AccountId, MenuItemId
from bitebox.domain.common.money import Money
from bitebox.domain.order.entities import OrderLine, PaymentMethod, order_total

MAX_LINE_QUANTITY = 1000
MAX_ORDER_AMOUNT = Decimal("1000000.00")


@dataclass(frozen=True)
class ValidatedOrder:
    vendor: Account
    lines: list[OrderLine]
    total: Money
    payment_method: PaymentMethod


class OrderValidator:
    """Checks an order request against live vendor and menu state.

    Only read-only lookups happen here; the first invalid field or line
    rejects the whole request.
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        menu_repository: MenuRepository,
    ) -> None:
        self._account_repository = account_repository
        self._menu_repository = menu_repository

    def validate(self, request_dto: PlaceOrderRequest) -> ValidatedOrder:
        missing = _missing_fields(request_dto)
        if missing:
            raise MissingFieldsError(
                "missing required order details",
                details={"fields": missing},
            )

        vendor_id = AccountId(str(request_dto.vendor_id))
        vendor = self._account_repository.get(vendor_id)
        if vendor is None or not vendor.is_vendor:
            raise VendorNotFoundError(f"vendor {vendor_id} not found")

        lines: list[OrderLine] = []
        for request_item in request_dto.items or []:
            label = request_item.name or request_item.menu_item_id
            if not 1 <= request_item.quantity <= MAX_LINE_QUANTITY:
                raise InvalidOrderRequestError(
                    f"quantity must be between 1 and {MAX_LINE_QUANTITY} for item {label}",
                    details={"menuItemId": request_item.menu_item_id},
                )

            menu_item = self._menu_repository.get_item(MenuItemId(request_item.menu_item_id))
            if menu_item is None or not menu_item.is_owned_by(vendor_id):
                raise InvalidMenuItemError(
                    f"invalid menu item: {label}",
                    details={"menuItemId": request_item.menu_item_id},
                )
            if not menu_item.is_available:
                raise InvalidMenuItemError(
                    f"menu item {label} is unavailable",
                    details={"menuItemId": request_item.menu_item_id},
                )
            if (
                request_item.price is not None
                and _amount(
                    request_item.price,
                    f"price for item {label}",
                    details={"menuItemId": request_item.menu_item_id},
                )
                != menu_item.price
            ):
                raise InvalidMenuItemError(
                    f"price for menu item {label} has changed",
                    details={
                        "menuItemId": request_item.menu_item_id,
                        "currentPrice": str(menu_item.price.to_decimal()),
                    },
                )

            lines.append(
                OrderLine(
                    menu_item_id=menu_item.item_id,
                    name=menu_item.name,
                    quantity=request_item.quantity,
                    unit_price=menu_item.price,
                )
            )

        payment_method = PaymentMethod.parse(str(request_dto.payment_method))
        if payment_method is None:
            raise UnsupportedPaymentMethodError(
                f"invalid payment method: {request_dto.payment_method}"
            )

        total = order_total(lines)
        if total.to_decimal() > MAX_ORDER_AMOUNT:
            raise InvalidOrderRequestError(
                f"order total exceeds {MAX_ORDER_AMOUNT}",
                details={"expectedTotal": str(total.to_decimal())},
            )
        requested_total = _amount(Decimal(str(request_dto.total_amount)), "totalAmount")
        if requested_total != total:
            raise TotalMismatchError(
                "totalAmount does not match the order items",
                details={"expectedTotal": str(total.to_decimal())},
            )

        return ValidatedOrder(
            vendor=vendor,
            lines=lines,
            total=total,
            payment_method=payment_method,
        )


def _amount(value: Decimal, label: str, details: dict[str, Any] | None = None) -> Money:
    if not value.is_finite() or not 0 <= value <= MAX_ORDER_AMOUNT:
        raise InvalidOrderRequestError(
            f"{label} must be between 0 and {MAX_ORDER_AMOUNT}",
            details=details,
        )
    return Money.from_decimal(value)


def _missing_fields(request_dto: PlaceOrderRequest) -> list[str]:
    missing: list[str] = []
    if not request_dto.items:
        missing.append("items")
    if request_dto.total_amount is None:
        missing.append("totalAmount")
    if not request_dto.vendor_id:
        missing.append("vendorId")
    if not request_dto.payment_method:
        missing.append("paymentMethod")
    return missing
