from __future__ import annotations

from bitebox.application.dto.responses import (
    MenuCategoryResponse,
    MenuItemResponse,
    VendorMenuResponse,
)
from bitebox.domain.account.entities import Account
from bitebox.domain.menu.entities import MenuItem


def to_menu_item_response(item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse(
        itemId=str(item.item_id),
        name=item.name,
        description=item.description,
        price=item.price.to_decimal(),
        category=item.category,
        type=item.diet_type.value,
        isAvailable=item.is_available,
    )


def to_vendor_menu_response(vendor: Account, items: list[MenuItem]) -> VendorMenuResponse:
    grouped: dict[str, list[MenuItemResponse]] = {}
    for item in items:
        grouped.setdefault(item.category, []).append(to_menu_item_response(item))
    return VendorMenuResponse(
        vendorId=str(vendor.account_id),
        restaurantName=vendor.display_name,
        categories=[
            MenuCategoryResponse(category=category, items=grouped[category])
            for category in sorted(grouped)
        ],
    )
