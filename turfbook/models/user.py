"""User model."""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from turfbook.core.database import Base


class User(Base):
    """A mock-authenticated marketplace user (owner or player)."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)  # uid, e.g. "mock-player-uid"
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    role = Column(String, nullable=False)  # owner, player
    created_at = Column(DateTime(timezone=True), server_default=func.now())
