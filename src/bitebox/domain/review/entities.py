from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from bitebox.domain.common.ids import AccountId, ReviewId

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class Review:
    review_id: ReviewId
    user_id: AccountId
    vendor_id: AccountId
    reviewer_name: str
    rating: int
    comment: str
    created_at: datetime

    def __post_init__(self) -> None:
        if not MIN_RATING <= self.rating <= MAX_RATING:
            raise ValueError(f"rating must be between {MIN_RATING} and {MAX_RATING}")
        if not self.comment.strip():
            raise ValueError("comment must be non-empty")


def average_rating(ratings: list[int]) -> float:
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)
