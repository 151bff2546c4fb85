"""Owner dashboard and analytics service."""
import logging
from collections import Counter, defaultdict
from datetime import date, timedelta
from typing import List

from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from turfbook.core.clock import local_today
from turfbook.models.booking import Booking
from turfbook.models.review import Review
from turfbook.models.slot import Slot
from turfbook.models.turf import Turf
from turfbook.schemas.analytics import (
    DailyBookings,
    OwnerAnalytics,
    OwnerDashboard,
    TimeRangeCount,
    TurfEarnings,
    UtilizationDaily,
    UtilizationHistory,
)
from turfbook.services.booking_service import booking_service
from turfbook.services.turf_service import turf_service

logger = logging.getLogger(__name__)

UPCOMING_WINDOW_DAYS = 7
TOP_SLOTS_LIMIT = 5


class AnalyticsService:
    """Service for owner-facing statistics."""

    async def get_dashboard(self, db: AsyncSession, owner_id: str) -> OwnerDashboard:
        """
        Headline numbers for the owner dashboard.

        Upcoming bookings are pending or approved bookings in the next
        seven days. Revenue counts paid bookings that were not cancelled.
        """
        turfs = await turf_service.list_owner_turfs(db, owner_id)
        bookings = await booking_service.list_owner_bookings(db, owner_id)

        today = local_today()
        horizon = today + timedelta(days=UPCOMING_WINDOW_DAYS)

        upcoming = sum(
            1 for b in bookings
            if b.status in ("pending", "approved") and today <= b.booking_date <= horizon
        )
        pending = sum(1 for b in bookings if b.status == "pending")
        revenue = sum(
            b.total_amount for b in bookings
            if b.payment_status == "paid" and b.status != "cancelled"
        )

        return OwnerDashboard(
            total_turfs=len(turfs),
            upcoming_bookings=upcoming,
            pending_bookings=pending,
            total_revenue=round(revenue, 2),
        )

    async def get_analytics(self, db: AsyncSession, owner_id: str) -> OwnerAnalytics:
        """Bookings per day, most booked slots, earnings per turf and ratings."""
        turfs = await turf_service.list_owner_turfs(db, owner_id)
        bookings = [
            b for b in await booking_service.list_owner_bookings(db, owner_id)
            if b.status != "cancelled"
        ]

        per_day = defaultdict(lambda: [0, 0])
        slot_counts = Counter()
        earnings = {t.id: [0, 0.0] for t in turfs}

        for booking in bookings:
            per_day[booking.booking_date][0] += 1
            per_day[booking.booking_date][1] += len(booking.slot_details)
            for detail in booking.slot_details:
                slot_counts[detail.time_range] += 1
            earnings[booking.turf_id][0] += 1
            if booking.payment_status == "paid":
                earnings[booking.turf_id][1] += booking.total_amount

        rating_distribution = {rating: 0 for rating in range(1, 6)}
        turf_ids = [t.id for t in turfs]
        if turf_ids:
            result = await db.execute(select(Review.rating).where(Review.turf_id.in_(turf_ids)))
            for (rating,) in result.all():
                rating_distribution[rating] += 1

        return OwnerAnalytics(
            bookings_per_day=[
                DailyBookings(date=day, bookings=counts[0], slots=counts[1])
                for day, counts in sorted(per_day.items())
            ],
            most_booked_slots=[
                TimeRangeCount(time_range=time_range, bookings=count)
                for time_range, count in slot_counts.most_common(TOP_SLOTS_LIMIT)
            ],
            earnings_by_turf=[
                TurfEarnings(
                    turf_id=t.id,
                    turf_name=t.name,
                    bookings=earnings[t.id][0],
                    earnings=round(earnings[t.id][1], 2),
                )
                for t in turfs
            ],
            rating_distribution=rating_distribution,
        )

    async def get_daily_utilization(
        self,
        db: AsyncSession,
        turf_id: int,
        owner_id: str,
        from_date: date,
        to_date: date,
    ) -> UtilizationHistory:
        """
        Get slot utilization for each day in a date range.

        Days without any slots are omitted.

        Args:
            db: Database session
            turf_id: Turf ID
            owner_id: Caller, must own the turf
            from_date: Start date
            to_date: End date

        Returns:
            Historical utilization data
        """
        turf = await turf_service.get_owned_turf(db, turf_id, owner_id)

        result = await db.execute(
            select(Slot).where(
                and_(
                    Slot.turf_id == turf_id,
                    Slot.date >= from_date,
                    Slot.date <= to_date,
                )
            )
        )
        by_date = defaultdict(list)
        for slot in result.scalars().all():
            by_date[slot.date].append(slot)

        daily_data: List[UtilizationDaily] = []
        current_date = from_date
        while current_date <= to_date:
            slots = by_date.get(current_date, [])

            total_slots = len(slots)
            if total_slots > 0:
                booked_slots = sum(1 for s in slots if s.status == "booked")
                available_slots = sum(1 for s in slots if s.status == "available")
                maintenance_slots = sum(1 for s in slots if s.status == "maintenance")

                daily_data.append(
                    UtilizationDaily(
                        date=current_date,
                        total_slots=total_slots,
                        booked_slots=booked_slots,
                        available_slots=available_slots,
                        maintenance_slots=maintenance_slots,
                        booked_percentage=round(booked_slots / total_slots * 100, 2),
                        available_percentage=round(available_slots / total_slots * 100, 2),
                    )
                )

            current_date += timedelta(days=1)

        return UtilizationHistory(
            turf_id=turf.id,
            turf_name=turf.name,
            from_date=from_date,
            to_date=to_date,
            daily_data=daily_data,
        )


# Singleton instance
analytics_service = AnalyticsService()
