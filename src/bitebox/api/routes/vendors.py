from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from bitebox.api.deps import get_caller_identity
from bitebox.application.dto.requests import CreateReviewRequest
from bitebox.application.dto.responses import (
    OrderListResponse,
    ReviewListResponse,
    ReviewResponse,
    VendorMenuResponse,
)
from bitebox.application.use_cases.context import CallerIdentity
from bitebox.application.use_cases.get_menu import GetVendorMenu
from bitebox.application.use_cases.vendor_orders import VendorOrders
from bitebox.application.use_cases.vendor_reviews import CreateVendorReview, ListVendorReviews
from bitebox.domain.common.ids import AccountId
from bitebox.infrastructure.db.repositories.account_repo import SqlAlchemyAccountRepository
from bitebox.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from bitebox.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository
from bitebox.infrastructure.db.repositories.review_repo import SqlAlchemyReviewRepository

router = APIRouter()


@router.get("/v1/vendors/me/orders", response_model=OrderListResponse)
def list_vendor_orders(
    caller: CallerIdentity = Depends(get_caller_identity),
    status_filter: str = Query(default="all", alias="status"),
    limit: int = Query(default=50),
) -> OrderListResponse:
    use_case = VendorOrders(
        order_repository=SqlAlchemyOrderRepository(),
        account_repository=SqlAlchemyAccountRepository(),
        menu_repository=SqlAlchemyMenuRepository(),
    )
    return use_case.execute(caller, status=status_filter, limit=limit)


@router.get("/v1/vendors/{vendor_id}/menu", response_model=VendorMenuResponse)
def get_vendor_menu(vendor_id: str) -> VendorMenuResponse:
    use_case = GetVendorMenu(
        account_repository=SqlAlchemyAccountRepository(),
        menu_repository=SqlAlchemyMenuRepository(),
    )
    return use_case.execute(vendor_id=AccountId(vendor_id))


@router.get("/v1/vendors/{vendor_id}/reviews", response_model=ReviewListResponse)
def list_vendor_reviews(vendor_id: str) -> ReviewListResponse:
    use_case = ListVendorReviews(
        account_repository=SqlAlchemyAccountRepository(),
        review_repository=SqlAlchemyReviewRepository(),
    )
    return use_case.execute(vendor_id=AccountId(vendor_id))


@router.post(
    "/v1/vendors/{vendor_id}/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_vendor_review(
    vendor_id: str,
    request_dto: CreateReviewRequest,
    caller: CallerIdentity = Depends(get_caller_identity),
) -> ReviewResponse:
    use_case = CreateVendorReview(
        account_repository=SqlAlchemyAccountRepository(),
        review_repository=SqlAlchemyReviewRepository(),
    )
    return use_case.execute(vendor_id=AccountId(vendor_id), caller=caller, request_dto=request_dto)
