from __future__ import annotations

from bitebox.application.dto.responses import OrderResponse
from bitebox.application.errors import OrderAccessDeniedError, OrderNotFoundError
from bitebox.application.ports.repositories import (
    AccountRepository,
    MenuRepository,
    OrderRepository,
)
from bitebox.application.use_cases.context import CallerIdentity
from bitebox.application.use_cases.order_details import OrderDetailsLoader
from bitebox.domain.common.ids import OrderId


class GetOrder:
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

    def execute(self, order_id: OrderId, caller: CallerIdentity) -> OrderResponse:
        order = self._order_repository.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"order {order_id} not found")
        if not order.involves(caller.account_id):
            raise OrderAccessDeniedError(f"order {order_id} is not visible to this account")
        return self._details.load(order)
