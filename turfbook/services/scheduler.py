"""Background scheduler that closes out past bookings."""
import logging
from datetime import datetime

import pytz
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from turfbook.core.clock import local_today
from turfbook.core.config import settings
from turfbook.core.database import session_scope
from turfbook.services.booking_service import booking_service

logger = logging.getLogger(__name__)


class BookingScheduler:
    """Background scheduler for booking housekeeping."""

    def __init__(self):
        """Initialize the scheduler."""
        self.scheduler = AsyncIOScheduler()
        self.running = False

    async def start(self):
        """Start the scheduler."""
        if self.running:
            logger.warning("Scheduler is already running")
            return

        logger.info("Starting booking scheduler")

        self.scheduler.add_job(
            self.sweep_past_bookings,
            IntervalTrigger(minutes=settings.BOOKING_SWEEP_INTERVAL_MINUTES),
            id="booking_sweep_job",
            name="Complete or expire past bookings",
            replace_existing=True,
            next_run_time=datetime.now(pytz.UTC),
        )

        self.scheduler.start()
        self.running = True
        logger.info("Booking scheduler started")

    async def stop(self):
        """Stop the scheduler."""
        if not self.running:
            return

        logger.info("Stopping booking scheduler")
        self.scheduler.shutdown(wait=False)
        self.running = False
        logger.info("Booking scheduler stopped")

    async def sweep_past_bookings(self):
        """
        Mark approved bookings dated before today as completed and cancel
        pending bookings that were never approved.
        """
        today = local_today()
        logger.debug(f"Running booking sweep for {today}")

        try:
            async with session_scope() as db:
                counts = await booking_service.sweep_past_bookings(db, today)
        except Exception as e:
            logger.error(f"Error in booking sweep: {e}", exc_info=True)
            return None

        if counts["completed"] or counts["expired"]:
            logger.info(
                f"Booking sweep: {counts['completed']} completed, {counts['expired']} expired"
            )
        return counts


# Singleton instance
booking_scheduler = BookingScheduler()
