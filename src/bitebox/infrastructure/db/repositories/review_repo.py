from __future__ import annotations

from datetime import timezone

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from bitebox.application.ports.repositories import ReviewRepository
from bitebox.domain.common.ids import AccountId, ReviewId
from bitebox.domain.review.entities import Review
from bitebox.infrastructure.db.models.review import ReviewModel
from bitebox.infrastructure.db.session import get_engine


class SqlAlchemyReviewRepository(ReviewRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def add(self, review: Review) -> None:
        with Session(self._engine) as session:
            session.add(
                ReviewModel(
                    id=str(review.review_id),
                    user_id=str(review.user_id),
                    vendor_id=str(review.vendor_id),
                    reviewer_name=review.reviewer_name,
                    rating=review.rating,
                    comment=review.comment,
                    created_at=review.created_at,
                )
            )
            session.commit()

    def list_for_vendor(self, vendor_id: AccountId) -> list[Review]:
        statement = (
            select(ReviewModel)
            .where(ReviewModel.vendor_id == str(vendor_id))
            .order_by(ReviewModel.created_at.desc(), ReviewModel.id.desc())
        )
        with Session(self._engine) as session:
            models = list(session.execute(statement).scalars().all())

        reviews: list[Review] = []
        for model in models:
            created_at = model.created_at
            if created_at.tzinfo is None:
                created_at = created_at.replace(tzinfo=timezone.utc)
            reviews.append(
                Review(
                    review_id=ReviewId(model.id),
                    user_id=AccountId(model.user_id),
                    vendor_id=AccountId(model.vendor_id),
                    reviewer_name=model.reviewer_name,
                    rating=model.rating,
                    comment=model.comment,
                    created_at=created_at,
                )
            )
        return reviews

    def ratings_for_vendor(self, vendor_id: AccountId) -> list[int]:
        statement = select(ReviewModel.rating).where(ReviewModel.vendor_id == str(vendor_id))
        with Session(self._engine) as session:
            return list(session.execute(statement).scalars().all())
