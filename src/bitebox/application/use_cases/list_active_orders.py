from __future__ import annotations

from bitebox.application.dto.responses import OrderListResponse
from bitebox.application.ports.repositories import (
    AccountRepository,
    MenuRepository,
    OrderRepository,
)
from bitebox.application.use_cases.order_details import OrderDetailsLoader
from bitebox.domain.common.ids import AccountId
from bitebox.domain.order.entities import ACTIVE_STATUSES


class ListActiveOrders:
    def __init__(
        self,
        order_repository: OrderRepository,
        account_repository: AccountRepository,
        menu_repository: MenuRepository,
    ) -> None:
        self._order_repository = order_repository
        self._details = OrderDetailsLoader(
            account_repository=account_repository,
            menu_repository=menu_repository,
        )

    def execute(self, user_id: AccountId) -> OrderListResponse:
        orders = self._order_repository.list_for_user(user_id=user_id, statuses=ACTIVE_STATUSES)
        active = [order for order in orders if order.status in ACTIVE_STATUSES]
        return OrderListResponse(orders=self._details.load_many(active))
