"""Turf schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Literal
from datetime import datetime

PHONE_PATTERN = r"^[+]?[(]?[0-9]{3}[)]?[-\s.]?[0-9]{3}[-\s.]?[0-9]{4,6}$"

TurfSort = Literal["price_asc", "price_desc", "rating", "newest"]


class TurfBase(BaseModel):
    """Base turf schema."""

    name: str = Field(..., min_length=3)
    location: str = Field(..., min_length=5)
    owner_phone_number: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    price_per_hour: float = Field(..., ge=0)
    images: List[str] = Field(..., min_length=1, max_length=5)
    amenities: List[str] = Field(..., min_length=1)
    description: str = Field(..., min_length=10, max_length=1000)
    is_visible: bool = True


class TurfCreate(TurfBase):
    """Schema for creating a turf."""

    average_rating: Optional[float] = Field(default=None, ge=0, le=5)
    review_count: Optional[int] = Field(default=None, ge=0)


class TurfUpdate(BaseModel):
    """Schema for updating a turf. Owner, id and creation time are immutable."""

    name: Optional[str] = Field(default=None, min_length=3)
    location: Optional[str] = Field(default=None, min_length=5)
    owner_phone_number: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    price_per_hour: Optional[float] = Field(default=None, ge=0)
    images: Optional[List[str]] = Field(default=None, min_length=1, max_length=5)
    amenities: Optional[List[str]] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=10, max_length=1000)
    is_visible: Optional[bool] = None


class TurfInDB(TurfBase):
    """Schema for turf from the store."""

    id: int
    owner_id: str
    average_rating: float = 0.0
    review_count: int = 0
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
