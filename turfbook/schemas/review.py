"""Review schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class ReviewCreate(BaseModel):
    """Schema for submitting a review."""

    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=10, max_length=500)


class ReviewReply(BaseModel):
    """Schema for an owner's reply to a review."""

    reply: str = Field(..., max_length=1000)


class ReviewInDB(BaseModel):
    """Schema for review from the store."""

    id: int
    turf_id: int
    user_id: str
    user_name: Optional[str] = None
    rating: int
    comment: str
    owner_reply: Optional[str] = None
    owner_replied_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReviewSummary(BaseModel):
    """Schema for the AI review summary."""

    turf_id: int
    review_count: int
    summary: str
