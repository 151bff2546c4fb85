"""Turf model."""
from sqlalchemy import Column, Integer, String, Float, Boolean, ForeignKey, DateTime, Text, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from turfbook.core.database import Base


class Turf(Base):
    """Represents a bookable sports field listed by an owner."""

    __tablename__ = "turfs"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    location = Column(String, nullable=False)
    owner_phone_number = Column(String, nullable=True)
    price_per_hour = Column(Float, nullable=False)
    images = Column(JSON, nullable=False, default=list)  # List of image URLs
    amenities = Column(JSON, nullable=False, default=list)  # e.g. ["parking", "floodlights"]
    description = Column(Text, nullable=False)
    is_visible = Column(Boolean, default=True, nullable=False)
    average_rating = Column(Float, default=0.0, nullable=False)
    review_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    slots = relationship("Slot", back_populates="turf", cascade="all, delete-orphan")
    reviews = relationship("Review", back_populates="turf", cascade="all, delete-orphan")
