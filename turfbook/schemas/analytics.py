"""Owner dashboard and analytics schemas."""
from pydantic import BaseModel
from typing import List, Dict
from datetime import date


class OwnerDashboard(BaseModel):
    """Schema for the owner dashboard headline numbers."""

    total_turfs: int
    upcoming_bookings: int
    pending_bookings: int
    total_revenue: float


class DailyBookings(BaseModel):
    """Bookings created for a given booking date."""

    date: date
    bookings: int
    slots: int


class TimeRangeCount(BaseModel):
    """How often a time range was booked."""

    time_range: str
    bookings: int


class TurfEarnings(BaseModel):
    """Paid revenue for one turf."""

    turf_id: int
    turf_name: str
    bookings: int
    earnings: float


class OwnerAnalytics(BaseModel):
    """Schema for the owner analytics page."""

    bookings_per_day: List[DailyBookings]
    most_booked_slots: List[TimeRangeCount]
    earnings_by_turf: List[TurfEarnings]
    rating_distribution: Dict[int, int]


class UtilizationDaily(BaseModel):
    """Schema for one day of slot utilization."""

    date: date
    total_slots: int
    booked_slots: int
    available_slots: int
    maintenance_slots: int
    booked_percentage: float
    available_percentage: float


class UtilizationHistory(BaseModel):
    """Schema for slot utilization over a date range."""

    turf_id: int
    turf_name: str
    from_date: date
    to_date: date
    daily_data: List[UtilizationDaily]
