"""API schemas."""
from turfbook.schemas.user import (
    LoginRequest,
    SignupRequest,
    UserInDB,
)
from turfbook.schemas.turf import (
    TurfCreate,
    TurfUpdate,
    TurfInDB,
)
from turfbook.schemas.slot import (
    SlotCreate,
    SlotUpsert,
    SlotStatusUpdate,
    SlotInDB,
)
from turfbook.schemas.booking import (
    BookedSlotRequest,
    BookingCreate,
    BookingInDB,
)
from turfbook.schemas.review import (
    ReviewCreate,
    ReviewReply,
    ReviewInDB,
    ReviewSummary,
)
from turfbook.schemas.analytics import (
    OwnerDashboard,
    OwnerAnalytics,
    UtilizationDaily,
    UtilizationHistory,
)

__all__ = [
    "LoginRequest",
    "SignupRequest",
    "UserInDB",
    "TurfCreate",
    "TurfUpdate",
    "TurfInDB",
    "SlotCreate",
    "SlotUpsert",
    "SlotStatusUpdate",
    "SlotInDB",
    "BookedSlotRequest",
    "BookingCreate",
    "BookingInDB",
    "ReviewCreate",
    "ReviewReply",
    "ReviewInDB",
    "ReviewSummary",
    "OwnerDashboard",
    "OwnerAnalytics",
    "UtilizationDaily",
    "UtilizationHistory",
]
