"""Booking schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Literal
from datetime import datetime, date

BookingStatus = Literal["pending", "approved", "cancelled", "completed"]
PaymentStatus = Literal["paid", "unpaid"]
BookingScope = Literal["all", "upcoming", "past"]


class BookedSlotRequest(BaseModel):
    """One slot in a booking request. No slot_id means a placeholder slot."""

    slot_id: Optional[int] = None
    time_range: str = Field(..., min_length=3)


class BookingCreate(BaseModel):
    """Schema for creating a booking."""

    turf_id: int
    booking_date: date
    slots: List[BookedSlotRequest] = Field(..., min_length=1)


class BookedSlotDetail(BaseModel):
    """Slot id and time range recorded on a booking."""

    slot_id: Optional[int] = None
    time_range: str

    model_config = ConfigDict(from_attributes=True)


class BookingInDB(BaseModel):
    """Schema for booking from the store."""

    id: int
    turf_id: int
    turf_name: Optional[str] = None
    turf_location: Optional[str] = None
    player_id: str
    player_name: Optional[str] = None
    booking_date: date
    slot_details: List[BookedSlotDetail]
    status: BookingStatus
    payment_status: PaymentStatus
    total_amount: float
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
