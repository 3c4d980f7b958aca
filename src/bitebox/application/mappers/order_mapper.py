from __future__ import annotations

from collections.abc import Mapping

from bitebox.application.dto.responses import (
    MenuItemSnapshotResponse,
    OrderItemResponse,
    OrderResponse,
    PartySummaryResponse,
)
from bitebox.domain.account.entities import Account
from bitebox.domain.menu.entities import MenuItem
from bitebox.domain.order.entities import Order


def to_party_summary(account_id: str, account: Account | None) -> PartySummaryResponse:
    if account is None:
        return PartySummaryResponse(id=account_id, name="unknown")
    return PartySummaryResponse(
        id=str(account.account_id),
        name=account.display_name,
        email=account.email,
        phoneNumber=account.phone_number,
    )


def to_order_response(
    order: Order,
    *,
    user: Account | None,
    vendor: Account | None,
    menu_items: Mapping[str, MenuItem],
) -> OrderResponse:
    items: list[OrderItemResponse] = []
    for line in order.lines:
        current = menu_items.get(str(line.menu_item_id))
        items.append(
            OrderItemResponse(
                menuItemId=str(line.menu_item_id),
                name=line.name,
                quantity=line.quantity,
                price=line.unit_price.to_decimal(),
                lineTotal=line.line_total.to_decimal(),
                menuItem=(
                    MenuItemSnapshotResponse(
                        name=current.name,
                        price=current.price.to_decimal(),
                        isAvailable=current.is_available,
                    )
                    if current is not None
                    else None
                ),
            )
        )

    return OrderResponse(
        orderId=str(order.order_id),
        user=to_party_summary(str(order.user_id), user),
        vendor=to_party_summary(str(order.vendor_id), vendor),
        userPhoneNumber=order.user_phone_number,
        items=items,
        totalAmount=order.total.to_decimal(),
        paymentMethod=order.payment_method.value,
        paymentStatus=order.payment_status.value,
        status=order.status.value,
        createdAt=order.created_at,
        updatedAt=order.updated_at,
    )
