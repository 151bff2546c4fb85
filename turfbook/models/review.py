"""Review model."""
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from turfbook.core.database import Base


class Review(Base):
    """A user's rating and comment on a turf, with an optional owner reply."""

    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    turf_id = Column(Integer, ForeignKey("turfs.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False)
    owner_reply = Column(Text, nullable=True)
    owner_replied_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    turf = relationship("Turf", back_populates="reviews")
    user = relationship("User", lazy="selectin")

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
    )

    @property
    def user_name(self):
        return self.user.name if self.user else None
