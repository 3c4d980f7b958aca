from __future__ import annotations

from bitebox.application.dto.responses import ReviewResponse
from bitebox.domain.review.entities import Review


def to_review_response(review: Review) -> ReviewResponse:
    return ReviewResponse(
        reviewId=str(review.review_id),
        userId=str(review.user_id),
        vendorId=str(review.vendor_id),
        name=review.reviewer_name,
        rating=review.rating,
        comment=review.comment,
        createdAt=review.created_at,
    )
