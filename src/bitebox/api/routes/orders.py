from __future__ import annotations

from fastapi import APIRouter, Depends, status

from bitebox.api.deps import get_caller_identity, get_dispatcher, get_trace_context
from bitebox.application.dto.requests import PlaceOrderRequest
from bitebox.application.dto.responses import OrderListResponse, OrderResponse
from bitebox.application.use_cases.context import CallerIdentity, TraceContext
from bitebox.application.use_cases.get_order import GetOrder
from bitebox.application.use_cases.list_active_orders import ListActiveOrders
from bitebox.application.use_cases.notification_dispatcher import NotificationDispatcher
from bitebox.application.use_cases.order_transitions import AdvanceOrderStatus, CancelOrder
from bitebox.application.use_cases.place_order import PlaceOrder
from bitebox.domain.common.ids import OrderId
from bitebox.infrastructure.db.repositories.account_repo import SqlAlchemyAccountRepository
from bitebox.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from bitebox.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository

router = APIRouter()


def _place_order_use_case(dispatcher: NotificationDispatcher) -> PlaceOrder:
    return PlaceOrder(
        account_repository=SqlAlchemyAccountRepository(),
        menu_repository=SqlAlchemyMenuRepository(),
        order_repository=SqlAlchemyOrderRepository(),
        dispatcher=dispatcher,
    )


def _list_active_orders_use_case() -> ListActiveOrders:
    return ListActiveOrders(
        order_repository=SqlAlchemyOrderRepository(),
        account_repository=SqlAlchemyAccountRepository(),
        menu_repository=SqlAlchemyMenuRepository(),
    )


def _get_order_use_case() -> GetOrder:
    return GetOrder(
        order_repository=SqlAlchemyOrderRepository(),
        account_repository=SqlAlchemyAccountRepository(),
        menu_repository=SqlAlchemyMenuRepository(),
    )


def _advance_order_use_case(dispatcher: NotificationDispatcher) -> AdvanceOrderStatus:
    return AdvanceOrderStatus(
        order_repository=SqlAlchemyOrderRepository(),
        account_repository=SqlAlchemyAccountRepository(),
        menu_repository=SqlAlchemyMenuRepository(),
        dispatcher=dispatcher,
    )


def _cancel_order_use_case(dispatcher: NotificationDispatcher) -> CancelOrder:
    return CancelOrder(
        order_repository=SqlAlchemyOrderRepository(),
        account_repository=SqlAlchemyAccountRepository(),
        menu_repository=SqlAlchemyMenuRepository(),
        dispatcher=dispatcher,
    )


@router.post(
    "/v1/orders",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
)
def place_order(
    request_dto: PlaceOrderRequest,
    caller: CallerIdentity = Depends(get_caller_identity),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    trace_ctx: TraceContext = Depends(get_trace_context),
) -> OrderResponse:
    return _place_order_use_case(dispatcher).execute(
        caller=caller,
        request_dto=request_dto,
        trace_ctx=trace_ctx,
    )


@router.get("/v1/orders/me/active", response_model=OrderListResponse)
def list_my_active_orders(
    caller: CallerIdentity = Depends(get_caller_identity),
) -> OrderListResponse:
    return _list_active_orders_use_case().execute(user_id=caller.account_id)


@router.get("/v1/orders/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: str,
    caller: CallerIdentity = Depends(get_caller_identity),
) -> OrderResponse:
    return _get_order_use_case().execute(order_id=OrderId(order_id), caller=caller)


@router.post("/v1/orders/{order_id}/advance", response_model=OrderResponse)
def advance_order(
    order_id: str,
    caller: CallerIdentity = Depends(get_caller_identity),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> OrderResponse:
    return _advance_order_use_case(dispatcher).execute(order_id=OrderId(order_id), caller=caller)


@router.post("/v1/orders/{order_id}/cancel", response_model=OrderResponse)
def cancel_order(
    order_id: str,
    caller: CallerIdentity = Depends(get_caller_identity),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> OrderResponse:
    return _cancel_order_use_case(dispatcher).execute(order_id=OrderId(order_id), caller=caller)
