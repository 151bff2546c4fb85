"""Review endpoints."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from turfbook.api.deps import get_current_user, get_optional_user, require_owner, to_http_exception
from turfbook.core.database import get_db, session_scope
from turfbook.core.exceptions import TurfBookError
from turfbook.models.user import User
from turfbook.schemas.review import ReviewCreate, ReviewInDB, ReviewReply, ReviewSummary
from turfbook.services.review_service import review_service
from turfbook.services.review_summarizer import review_summarizer
from turfbook.services.turf_service import turf_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["reviews"])


@router.get("/turfs/{turf_id}/reviews", response_model=List[ReviewInDB])
async def list_reviews(
    turf_id: int,
    user: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """List a turf's reviews, newest first. Hidden turfs only for their owner."""
    try:
        await turf_service.get_visible_turf(db, turf_id, user.id if user else None)
        return await review_service.list_reviews(db, turf_id)
    except TurfBookError as e:
        raise to_http_exception(e)


@router.post("/turfs/{turf_id}/reviews", response_model=ReviewInDB, status_code=201)
async def add_review(
    turf_id: int,
    review: ReviewCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Review a turf.

    The turf's average rating and review count are recomputed from all of
    its reviews.
    """
    try:
        return await review_service.add_review(db, turf_id, user, review)
    except TurfBookError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to add review to turf {turf_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to submit review: {str(e)}")


@router.get("/turfs/{turf_id}/reviews/summary", response_model=ReviewSummary)
async def summarize_reviews(
    turf_id: int,
    x_user_id: Optional[str] = Header(default=None),
):
    """
    Generate an AI summary of a turf's reviews.

    Falls back to a canned message when the model is unavailable. The store
    is released before the model is called.
    """
    try:
        async with session_scope() as db:
            await turf_service.get_visible_turf(db, turf_id, x_user_id)
            reviews = await review_service.list_reviews(db, turf_id)
    except TurfBookError as e:
        raise to_http_exception(e)

    payload = [
        {
            "user_id": r.user_id,
            "rating": r.rating,
            "comment": r.comment,
            "created_at": r.created_at.isoformat() if r.created_at else "",
        }
        for r in reviews
    ]
    summary = await review_summarizer.summarize(turf_id, payload)

    return ReviewSummary(turf_id=turf_id, review_count=len(reviews), summary=summary)


@router.post("/reviews/{review_id}/reply", response_model=ReviewInDB)
async def reply_to_review(
    review_id: int,
    reply: ReviewReply,
    owner: User = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """Post the turf owner's reply to a review."""
    try:
        return await review_service.reply_to_review(db, review_id, owner.id, reply.reply)
    except TurfBookError as e:
        raise to_http_exception(e)
