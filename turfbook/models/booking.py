"""Booking models."""
from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, Date
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from turfbook.core.database import Base

BOOKING_STATUSES = ("pending", "approved", "cancelled", "completed")
PAYMENT_STATUSES = ("paid", "unpaid")


class Booking(Base):
    """A player's reservation of one or more slots on a single date."""

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    turf_id = Column(Integer, ForeignKey("turfs.id", ondelete="CASCADE"), nullable=False, index=True)
    player_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    booking_date = Column(Date, nullable=False, index=True)
    status = Column(String, nullable=False, default="pending")
    payment_status = Column(String, nullable=False, default="unpaid")
    total_amount = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    turf = relationship("Turf", lazy="selectin")
    player = relationship("User", lazy="selectin")
    slot_details = relationship(
        "BookedSlot",
        back_populates="booking",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="BookedSlot.id",
    )

    @property
    def turf_name(self):
        return self.turf.name if self.turf else None

    @property
    def turf_location(self):
        return self.turf.location if self.turf else None

    @property
    def player_name(self):
        if self.player:
            return self.player.name
        return f"Player (...{self.player_id[-4:]})"


class BookedSlot(Base):
    """Slot id and time range captured at booking time."""

    __tablename__ = "booked_slots"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True)
    slot_id = Column(Integer, ForeignKey("slots.id", ondelete="SET NULL"), nullable=True)
    time_range = Column(String, nullable=False)

    booking = relationship("Booking", back_populates="slot_details")
