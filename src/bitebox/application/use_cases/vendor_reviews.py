from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from bitebox.application.dto.requests import CreateReviewRequest
from bitebox.application.dto.responses import ReviewListResponse, ReviewResponse
from bitebox.application.errors import (
    InvalidReviewError,
    MissingFieldsError,
    UserNotFoundError,
    VendorNotFoundError,
)
from bitebox.application.mappers.review_mapper import to_review_response
from bitebox.application.ports.repositories import AccountRepository, ReviewRepository
from bitebox.application.use_cases.context import CallerIdentity
from bitebox.domain.account.entities import Account
from bitebox.domain.common.ids import AccountId, ReviewId
from bitebox.domain.review.entities import Review, average_rating

logger = logging.getLogger(__name__)


class CreateVendorReview:
    """Stores a review and refreshes the vendor's rating aggregate."""

    def __init__(
        self,
        account_repository: AccountRepository,
        review_repository: ReviewRepository,
    ) -> None:
        self._account_repository = account_repository
        self._review_repository = review_repository

    def execute(
        self,
        vendor_id: AccountId,
        caller: CallerIdentity,
        request_dto: CreateReviewRequest,
    ) -> ReviewResponse:
        missing = [
            name
            for name, value in (("rating", request_dto.rating), ("comment", request_dto.comment))
            if not value
        ]
        if missing:
            raise MissingFieldsError("rating and comment are required", details={"fields": missing})

        vendor = _require_vendor(self._account_repository, vendor_id)
        if caller.account_id == vendor.account_id:
            raise InvalidReviewError("vendors cannot review their own restaurant")
        reviewer = self._account_repository.get(caller.account_id)
        if reviewer is None:
            raise UserNotFoundError(f"user {caller.account_id} not found")

        try:
            review = Review(
                review_id=ReviewId(f"rev_{uuid4().hex[:12]}"),
                user_id=reviewer.account_id,
                vendor_id=vendor.account_id,
                reviewer_name=reviewer.username,
                rating=int(request_dto.rating or 0),
                comment=(request_dto.comment or "").strip(),
                created_at=datetime.now(timezone.utc),
            )
        except ValueError as exc:
            raise InvalidReviewError(str(exc)) from exc

        self._review_repository.add(review)

        ratings = self._review_repository.ratings_for_vendor(vendor.account_id)
        self._account_repository.update_rating(
            vendor.account_id,
            rating=average_rating(ratings),
            num_reviews=len(ratings),
        )
        logger.info(
            "vendor_review_created",
            extra={"vendor_id": str(vendor.account_id), "review_id": str(review.review_id)},
        )
        return to_review_response(review)


class ListVendorReviews:
    def __init__(
        self,
        account_repository: AccountRepository,
        review_repository: ReviewRepository,
    ) -> None:
        self._account_repository = account_repository
        self._review_repository = review_repository

    def execute(self, vendor_id: AccountId) -> ReviewListResponse:
        vendor = _require_vendor(self._account_repository, vendor_id)
        reviews = self._review_repository.list_for_vendor(vendor.account_id)
        details = vendor.vendor_details
        return ReviewListResponse(
            reviews=[to_review_response(review) for review in reviews],
            rating=details.rating if details else 0.0,
            numReviews=details.num_reviews if details else 0,
        )


def _require_vendor(account_repository: AccountRepository, vendor_id: AccountId) -> Account:
    vendor = account_repository.get(vendor_id)
    if vendor is None or not vendor.is_vendor:
        raise VendorNotFoundError(f"vendor {vendor_id} not found")
    return vendor
