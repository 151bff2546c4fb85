"""Marketplace-local dates.

Bookings and slots carry plain dates, so "today" is always taken in the
configured marketplace timezone rather than the server's.
"""
from datetime import date, datetime

import pytz

from turfbook.core.config import settings


def local_now() -> datetime:
    """Current time in the marketplace timezone."""
    tz = pytz.timezone(settings.TIMEZONE or "UTC")
    return datetime.now(pytz.UTC).astimezone(tz)


def local_today() -> date:
    """Today's date in the marketplace timezone."""
    return local_now().date()
