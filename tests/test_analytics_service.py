"""Tests for owner dashboard, analytics and utilization numbers."""

from datetime import timedelta

import pytest

from conftest import TOMORROW
from turfbook.core.exceptions import PermissionDeniedError
from turfbook.schemas.booking import BookingCreate
from turfbook.schemas.review import ReviewCreate
from turfbook.services.analytics_service import analytics_service
from turfbook.services.booking_service import booking_service
from turfbook.services.review_service import review_service


async def book(db, player, turf, slots):
    return await booking_service.create_booking(
        db,
        player,
        BookingCreate(
            turf_id=turf.id,
            booking_date=TOMORROW,
            slots=[{"slot_id": s.id, "time_range": s.time_range} for s in slots],
        ),
    )


@pytest.fixture
async def activity(db, owner, player, other_player, turf, slots):
    """One approved and paid two-slot booking plus one pending booking."""
    paid = await book(db, player, turf, slots[:2])
    await booking_service.approve_booking(db, paid.id, owner.id)
    await booking_service.mark_booking_paid(db, paid.id, owner.id)

    pending = await book(db, other_player, turf, slots[2:])

    return paid, pending


async def test_dashboard(db, owner, activity):
    dashboard = await analytics_service.get_dashboard(db, owner.id)

    assert dashboard.total_turfs == 1
    assert dashboard.upcoming_bookings == 2
    assert dashboard.pending_bookings == 1
    assert dashboard.total_revenue == 2000


async def test_dashboard_for_owner_without_turfs(db, player):
    dashboard = await analytics_service.get_dashboard(db, player.id)

    assert dashboard.total_turfs == 0
    assert dashboard.total_revenue == 0


async def test_analytics(db, owner, player, turf, activity):
    await review_service.add_review(
        db, turf.id, player, ReviewCreate(rating=4, comment="Solid pitch, good lights.")
    )

    analytics = await analytics_service.get_analytics(db, owner.id)

    assert len(analytics.bookings_per_day) == 1
    assert analytics.bookings_per_day[0].bookings == 2
    assert analytics.bookings_per_day[0].slots == 3
    assert {c.time_range for c in analytics.most_booked_slots} == {
        "06:00 PM - 07:00 PM",
        "07:00 PM - 08:00 PM",
        "08:00 PM - 09:00 PM",
    }
    assert analytics.earnings_by_turf[0].bookings == 2
    assert analytics.earnings_by_turf[0].earnings == 2000
    assert analytics.rating_distribution == {1: 0, 2: 0, 3: 0, 4: 1, 5: 0}


async def test_cancelled_bookings_are_left_out(db, owner, player, turf, slots):
    booking = await book(db, player, turf, slots[:1])
    await booking_service.reject_booking(db, booking.id, owner.id)

    analytics = await analytics_service.get_analytics(db, owner.id)

    assert analytics.bookings_per_day == []
    assert analytics.earnings_by_turf[0].bookings == 0


async def test_daily_utilization(db, owner, player, turf, slots):
    slots[2].status = "maintenance"
    await db.commit()
    await book(db, player, turf, slots[:1])

    history = await analytics_service.get_daily_utilization(
        db, turf.id, owner.id, TOMORROW - timedelta(days=1), TOMORROW + timedelta(days=1)
    )

    assert history.turf_name == "Riverside Five"
    assert len(history.daily_data) == 1
    day = history.daily_data[0]
    assert day.date == TOMORROW
    assert (day.total_slots, day.booked_slots, day.available_slots, day.maintenance_slots) == (3, 1, 1, 1)
    assert day.booked_percentage == 33.33


async def test_utilization_requires_ownership(db, player, turf):
    with pytest.raises(PermissionDeniedError):
        await analytics_service.get_daily_utilization(db, turf.id, player.id, TOMORROW, TOMORROW)
