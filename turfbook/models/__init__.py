"""Database models."""
from turfbook.models.user import User
from turfbook.models.turf import Turf
from turfbook.models.slot import Slot
from turfbook.models.booking import Booking, BookedSlot
from turfbook.models.review import Review

__all__ = ["User", "Turf", "Slot", "Booking", "BookedSlot", "Review"]
