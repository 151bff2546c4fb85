"""Slot schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal
from datetime import datetime, date

SlotStatus = Literal["available", "booked", "maintenance"]


class SlotBase(BaseModel):
    """Base slot schema."""

    date: date
    time_range: str = Field(..., min_length=3)
    status: SlotStatus = "available"


class SlotCreate(SlotBase):
    """Schema for adding a single slot."""

    pass


class SlotUpsert(SlotBase):
    """Schema for one entry of a bulk slot save. No id means a new slot."""

    id: Optional[int] = None


class SlotStatusUpdate(BaseModel):
    """Schema for changing a slot's status."""

    status: SlotStatus


class SlotInDB(SlotBase):
    """Schema for slot from the store.

    Generated default slots are not persisted and carry no id.
    """

    id: Optional[int] = None
    turf_id: int
    booked_by: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
