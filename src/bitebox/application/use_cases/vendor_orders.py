from __future__ import annotations

from bitebox.application.dto.responses import OrderListResponse
from bitebox.application.errors import InvalidOrderRequestError, OrderAccessDeniedError
from bitebox.application.ports.repositories import (
    AccountRepository,
    MenuRepository,
    OrderRepository,
)
from bitebox.application.use_cases.context import CallerIdentity
from bitebox.application.use_cases.order_details import OrderDetailsLoader
from bitebox.domain.order.entities import OrderStatus

_STATUS_MAP: dict[str, OrderStatus | None] = {"all": None}
_STATUS_MAP.update({status.value: status for status in OrderStatus})


class VendorOrders:
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

    def execute(
        self,
        caller: CallerIdentity,
        *,
        status: str = "all",
        limit: int = 50,
    ) -> OrderListResponse:
        if not caller.is_vendor:
            raise OrderAccessDeniedError("only vendors can list incoming orders")

        normalized_status = status.lower()
        if normalized_status not in _STATUS_MAP:
            raise InvalidOrderRequestError(f"invalid order status filter: {status}")
        if limit < 1 or limit > 200:
            raise InvalidOrderRequestError("limit must be between 1 and 200")

        orders = self._order_repository.list_for_vendor(
            vendor_id=caller.account_id,
            status=_STATUS_MAP[normalized_status],
            limit=limit,
        )
        return OrderListResponse(orders=self._details.load_many(orders))
