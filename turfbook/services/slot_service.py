"""Slot management service.

Time ranges are free-form strings such as ``"09:00 AM - 10:00 AM"``. They are
only parsed for ordering; nothing prevents two slots from overlapping.
"""
import logging
import re
from datetime import date, datetime, time as dt_time
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from turfbook.core.clock import local_today
from turfbook.core.config import settings
from turfbook.core.exceptions import InvalidStateError, NotFoundError, ValidationFailedError
from turfbook.models.slot import Slot
from turfbook.schemas.slot import SlotCreate, SlotInDB, SlotUpsert
from turfbook.services.turf_service import turf_service

logger = logging.getLogger(__name__)

_TIME_RE = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?\s*([AaPp][Mm])?\s*$")


def parse_time(time_str: str) -> dt_time:
    """Parse "07:00 PM", "7 pm" or "19:00" into a time. Unparseable input is midnight."""
    match = _TIME_RE.match(time_str or "")
    if not match:
        logger.warning(f"Failed to parse time '{time_str}'")
        return dt_time(hour=0, minute=0)

    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    meridiem = (match.group(3) or "").upper()

    if meridiem == "PM" and hour != 12:
        hour += 12
    elif meridiem == "AM" and hour == 12:
        hour = 0

    if hour > 23 or minute > 59:
        logger.warning(f"Time out of range '{time_str}'")
        return dt_time(hour=0, minute=0)

    return dt_time(hour=hour, minute=minute)


def parse_time_range(time_range: str) -> Tuple[dt_time, dt_time]:
    """Split a time range string into its start and end times."""
    start, _, end = (time_range or "").partition("-")
    return parse_time(start), parse_time(end)


def format_hour(hour: int) -> str:
    """Format a 24h hour as "HH:00 AM/PM". 12 is noon, 0 and 24 are midnight."""
    meridiem = "PM" if 12 <= hour < 24 else "AM"
    h = hour % 12
    if h == 0:
        h = 12
    return f"{h:02d}:00 {meridiem}"


def slot_sort_key(slot) -> Tuple[date, dt_time, str]:
    return slot.date, parse_time_range(slot.time_range)[0], slot.time_range


def generate_default_slots(turf_id: int, slot_date: date) -> List[SlotInDB]:
    """Hourly available placeholder slots for a day with no slots. Not persisted."""
    return [
        SlotInDB(
            turf_id=turf_id,
            date=slot_date,
            time_range=f"{format_hour(hour)} - {format_hour(hour + 1)}",
            status="available",
        )
        for hour in range(settings.DEFAULT_SLOT_START_HOUR, settings.DEFAULT_SLOT_END_HOUR)
    ]


class SlotService:
    """Service for the owner's slot manager and the player's slot picker."""

    async def list_slots(
        self,
        db: AsyncSession,
        turf_id: int,
        slot_date: Optional[date] = None,
        include_defaults: bool = False,
    ) -> list:
        """
        List a turf's slots ordered by date and start time.

        Args:
            db: Database session
            turf_id: Turf ID
            slot_date: Only return slots on this date
            include_defaults: With a date and no stored slots, return
                generated placeholder slots instead of an empty list

        Returns:
            Slot models, or SlotInDB placeholders without ids
        """
        await turf_service.get_turf(db, turf_id)

        query = select(Slot).where(Slot.turf_id == turf_id)
        if slot_date is not None:
            query = query.where(Slot.date == slot_date)

        result = await db.execute(query)
        slots = sorted(result.scalars().all(), key=slot_sort_key)

        if not slots and slot_date is not None and include_defaults:
            logger.debug(f"No slots for turf {turf_id} on {slot_date}, generating defaults")
            return generate_default_slots(turf_id, slot_date)

        return slots

    async def get_slot(self, db: AsyncSession, slot_id: int) -> Slot:
        result = await db.execute(select(Slot).where(Slot.id == slot_id))
        slot = result.scalar_one_or_none()

        if not slot:
            raise NotFoundError("Slot", slot_id)

        return slot

    async def add_slot(
        self, db: AsyncSession, turf_id: int, data: SlotCreate, owner_id: str
    ) -> Slot:
        """Add one slot to a turf the caller owns."""
        await turf_service.get_owned_turf(db, turf_id, owner_id)
        self._check_owner_status(data.status)
        self._check_not_past(data.date)

        slot = Slot(turf_id=turf_id, **data.model_dump())
        db.add(slot)
        await db.commit()
        await db.refresh(slot)

        logger.info(f"Added slot {slot.id} to turf {turf_id}: {slot.date} {slot.time_range}")
        return slot

    async def update_slot_status(
        self, db: AsyncSession, slot_id: int, status: str, owner_id: str
    ) -> Slot:
        """Switch a slot between available and maintenance."""
        slot = await self.get_slot(db, slot_id)
        await turf_service.get_owned_turf(db, slot.turf_id, owner_id)

        if slot.status == "booked":
            raise InvalidStateError("Slot", slot_id, slot.status, "change status of")
        self._check_owner_status(status)

        slot.status = status
        await db.commit()
        await db.refresh(slot)

        logger.info(f"Slot {slot_id} is now {status}")
        return slot

    async def delete_slot(self, db: AsyncSession, slot_id: int, owner_id: str) -> None:
        """Delete a slot that is not booked."""
        slot = await self.get_slot(db, slot_id)
        await turf_service.get_owned_turf(db, slot.turf_id, owner_id)

        if slot.status == "booked":
            raise InvalidStateError("Slot", slot_id, slot.status, "delete")

        await db.delete(slot)
        await db.commit()

        logger.info(f"Deleted slot {slot_id} from turf {slot.turf_id}")

    async def replace_slots(
        self,
        db: AsyncSession,
        turf_id: int,
        slots: List[SlotUpsert],
        owner_id: str,
    ) -> List[Slot]:
        """
        Save the slot manager's full slot list for a turf.

        The turf's slots become exactly ``slots``. Entries without an id are
        created. Stored slots missing from the list are deleted. Booked slots
        must be submitted unchanged. New or moved slots cannot be dated
        before today.

        Args:
            db: Database session
            turf_id: Turf ID
            slots: Complete desired slot list
            owner_id: Caller, must own the turf

        Returns:
            The turf's slots after the save
        """
        await turf_service.get_owned_turf(db, turf_id, owner_id)

        result = await db.execute(select(Slot).where(Slot.turf_id == turf_id))
        existing = {slot.id: slot for slot in result.scalars().all()}

        submitted_ids = [s.id for s in slots if s.id is not None]
        if len(submitted_ids) != len(set(submitted_ids)):
            raise ValidationFailedError("Duplicate slot ids in submission")

        unknown = set(submitted_ids) - set(existing)
        if unknown:
            raise ValidationFailedError(
                f"Slots {sorted(unknown)} do not belong to turf {turf_id}",
                details={"slot_ids": sorted(unknown)},
            )

        by_id = {s.id: s for s in slots if s.id is not None}

        # Validate everything before touching the store
        for slot_id, slot in existing.items():
            if slot.status != "booked":
                continue
            incoming = by_id.get(slot_id)
            if incoming is None:
                raise InvalidStateError("Slot", slot_id, slot.status, "delete")
            if (
                incoming.status != "booked"
                or incoming.date != slot.date
                or incoming.time_range != slot.time_range
            ):
                raise InvalidStateError("Slot", slot_id, slot.status, "modify")

        for incoming in slots:
            if incoming.id is not None and existing[incoming.id].status == "booked":
                continue
            self._check_owner_status(incoming.status)
            if incoming.id is None or incoming.date != existing[incoming.id].date:
                self._check_not_past(incoming.date)

        deleted = 0
        for slot_id, slot in existing.items():
            if slot_id not in by_id:
                await db.delete(slot)
                deleted += 1

        created = 0
        for incoming in slots:
            if incoming.id is None:
                db.add(Slot(turf_id=turf_id, **incoming.model_dump(exclude={"id"})))
                created += 1
            else:
                slot = existing[incoming.id]
                slot.date = incoming.date
                slot.time_range = incoming.time_range
                slot.status = incoming.status

        await db.commit()

        logger.info(
            f"Saved slots for turf {turf_id}: {created} created, "
            f"{deleted} deleted, {len(by_id)} kept"
        )
        return await self.list_slots(db, turf_id)

    def _check_owner_status(self, status: str) -> None:
        if status == "booked":
            raise ValidationFailedError("Slots can only become booked through a booking")

    def _check_not_past(self, slot_date: date) -> None:
        if slot_date < local_today():
            raise ValidationFailedError(f"Cannot schedule a slot on a past date ({slot_date})")


# Singleton instance
slot_service = SlotService()
