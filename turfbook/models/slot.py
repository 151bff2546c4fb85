"""Slot model."""
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Date, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from turfbook.core.database import Base

SLOT_STATUSES = ("available", "booked", "maintenance")


class Slot(Base):
    """A bookable time interval for a turf on a given date."""

    __tablename__ = "slots"

    id = Column(Integer, primary_key=True, index=True)
    turf_id = Column(Integer, ForeignKey("turfs.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    time_range = Column(String, nullable=False)  # "09:00 AM - 10:00 AM", free-form
    status = Column(String, nullable=False, default="available")  # available, booked, maintenance
    booked_by = Column(String, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    turf = relationship("Turf", back_populates="slots")

    __table_args__ = (
        Index("ix_slots_turf_date", "turf_id", "date"),
    )
