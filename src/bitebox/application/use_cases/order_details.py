from __future__ import annotations

from bitebox.application.dto.responses import OrderResponse
from bitebox.application.mappers.order_mapper import to_order_response
from bitebox.application.ports.repositories import AccountRepository, MenuRepository
from bitebox.domain.account.entities import Account
from bitebox.domain.common.ids import AccountId, MenuItemId
from bitebox.domain.menu.entities import MenuItem
from bitebox.domain.order.entities import Order


class OrderDetailsLoader:
    """Joins orders with current account and menu display data at read time."""

    def __init__(
        self,
        account_repository: AccountRepository,
        menu_repository: MenuRepository,
    ) -> None:
        self._account_repository = account_repository
        self._menu_repository = menu_repository

    def load(self, order: Order) -> OrderResponse:
        return self.load_many([order])[0]

    def load_many(self, orders: list[Order]) -> list[OrderResponse]:
        accounts: dict[str, Account | None] = {}
        menu_items: dict[str, MenuItem] = {}

        for order in orders:
            for account_id in (order.user_id, order.vendor_id):
                key = str(account_id)
                if key not in accounts:
                    accounts[key] = self._account_repository.get(AccountId(key))
            for line in order.lines:
                key = str(line.menu_item_id)
                if key in menu_items:
                    continue
                item = self._menu_repository.get_item(MenuItemId(key))
                if item is not None:
                    menu_items[key] = item

        return [
            to_order_response(
                order,
                user=accounts.get(str(order.user_id)),
                vendor=accounts.get(str(order.vendor_id)),
                menu_items=menu_items,
            )
            for order in orders
        ]
