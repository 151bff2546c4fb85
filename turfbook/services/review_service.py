"""Review service."""
import logging
from datetime import datetime
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from turfbook.core.exceptions import NotFoundError, ValidationFailedError
from turfbook.models.review import Review
from turfbook.models.turf import Turf
from turfbook.models.user import User
from turfbook.schemas.review import ReviewCreate
from turfbook.services.turf_service import turf_service

logger = logging.getLogger(__name__)

MIN_REPLY_LENGTH = 3


class ReviewService:
    """Service for turf reviews and owner replies."""

    async def list_reviews(self, db: AsyncSession, turf_id: int) -> List[Review]:
        """List a turf's reviews, newest first."""
        await turf_service.get_turf(db, turf_id)

        result = await db.execute(
            select(Review)
            .where(Review.turf_id == turf_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
        )
        return list(result.scalars().all())

    async def add_review(
        self, db: AsyncSession, turf_id: int, user: User, data: ReviewCreate
    ) -> Review:
        """
        Add a review and refresh the turf's rating aggregate.

        Args:
            db: Database session
            turf_id: Turf ID
            user: Reviewer
            data: Rating and comment

        Returns:
            Created review

        Raises:
            NotFoundError: Turf does not exist or is hidden from the reviewer
        """
        turf = await turf_service.get_visible_turf(db, turf_id, user.id)

        review = Review(
            turf_id=turf_id,
            user_id=user.id,
            rating=data.rating,
            comment=data.comment,
        )
        db.add(review)
        await db.flush()

        await self._recompute_rating(db, turf)
        await db.commit()
        review = await self.get_review(db, review.id)

        logger.info(
            f"User {user.id} rated turf {turf_id} {data.rating}/5, "
            f"turf now {turf.average_rating} over {turf.review_count} review(s)"
        )
        return review

    async def reply_to_review(
        self, db: AsyncSession, review_id: int, owner_id: str, reply: str
    ) -> Review:
        """Attach the turf owner's reply to a review."""
        review = await self.get_review(db, review_id)
        await turf_service.get_owned_turf(db, review.turf_id, owner_id)

        text = (reply or "").strip()
        if len(text) < MIN_REPLY_LENGTH:
            raise ValidationFailedError(
                f"Reply must be at least {MIN_REPLY_LENGTH} characters long"
            )

        review.owner_reply = text
        review.owner_replied_at = datetime.utcnow()
        await db.commit()
        review = await self.get_review(db, review_id)

        logger.info(f"Owner {owner_id} replied to review {review_id}")
        return review

    async def get_review(self, db: AsyncSession, review_id: int) -> Review:
        result = await db.execute(
            select(Review)
            .where(Review.id == review_id)
            .execution_options(populate_existing=True)
        )
        review = result.scalar_one_or_none()

        if not review:
            raise NotFoundError("Review", review_id)

        return review

    async def _recompute_rating(self, db: AsyncSession, turf: Turf) -> None:
        # Full re-scan of the turf's reviews
        result = await db.execute(select(Review.rating).where(Review.turf_id == turf.id))
        ratings = [row[0] for row in result.all()]

        turf.review_count = len(ratings)
        turf.average_rating = round(sum(ratings) / len(ratings), 1) if ratings else 0.0


# Singleton instance
review_service = ReviewService()
