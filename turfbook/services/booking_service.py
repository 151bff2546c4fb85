"""Booking service.

A booking claims one or more slots of a turf on a single date. Each
operation runs as a single transaction: if any slot cannot be claimed, the
whole booking is rolled back and no slot changes status.
"""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import select, update, and_
from sqlalchemy.ext.asyncio import AsyncSession

from turfbook.core.clock import local_today
from turfbook.core.exceptions import (
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    SlotUnavailableError,
    ValidationFailedError,
)
from turfbook.models.booking import Booking, BookedSlot
from turfbook.models.slot import Slot
from turfbook.models.turf import Turf
from turfbook.models.user import User
from turfbook.schemas.booking import BookingCreate
from turfbook.services.turf_service import turf_service

logger = logging.getLogger(__name__)


class BookingService:
    """Service for creating bookings and moving them through their lifecycle."""

    async def create_booking(
        self, db: AsyncSession, player: User, request: BookingCreate
    ) -> Booking:
        """
        Book a set of slots for a player.

        Persisted slots must belong to the turf, fall on the booking date and
        be available. Slots given without an id were generated client side;
        they are matched to a stored slot with the same date and time range,
        or created on the spot.

        Args:
            db: Database session
            player: Booking user
            request: Turf, date and requested slots

        Returns:
            The pending, unpaid booking

        Raises:
            NotFoundError: Turf or slot does not exist
            SlotUnavailableError: A slot is booked, under maintenance or mismatched
            ValidationFailedError: Duplicate slots, a past date or a hidden turf
        """
        turf = await turf_service.get_turf(db, request.turf_id)
        if not turf.is_visible and turf.owner_id != player.id:
            raise ValidationFailedError(f"Turf {turf.id} is not open for booking")

        if request.booking_date < local_today():
            raise ValidationFailedError(f"Cannot book slots on a past date ({request.booking_date})")

        self._check_no_duplicates(request)
        turf_id, player_id = turf.id, player.id

        logger.info(
            f"Player {player.id} booking {len(request.slots)} slot(s) at turf {turf.id} "
            f"on {request.booking_date}"
        )

        try:
            details = []
            for requested in request.slots:
                slot = await self._claim_slot(db, turf, request.booking_date, requested, player.id)
                details.append(BookedSlot(slot_id=slot.id, time_range=slot.time_range))

            booking = Booking(
                turf_id=turf.id,
                player_id=player.id,
                booking_date=request.booking_date,
                status="pending",
                payment_status="unpaid",
                total_amount=turf.price_per_hour * len(details),
                slot_details=details,
            )
            db.add(booking)
            await db.commit()
        except Exception:
            await db.rollback()
            logger.warning(
                f"Booking by {player_id} at turf {turf_id} rolled back", exc_info=True
            )
            raise

        logger.info(f"Created booking {booking.id} for {player_id}: {booking.total_amount}")
        return await self.get_booking(db, booking.id)

    async def _claim_slot(
        self, db: AsyncSession, turf: Turf, booking_date: date, requested, player_id: str
    ) -> Slot:
        if requested.slot_id is None:
            result = await db.execute(
                select(Slot).where(
                    and_(
                        Slot.turf_id == turf.id,
                        Slot.date == booking_date,
                        Slot.time_range == requested.time_range,
                    )
                )
            )
            slot = result.scalars().first()

            if slot is None:
                slot = Slot(
                    turf_id=turf.id,
                    date=booking_date,
                    time_range=requested.time_range,
                    status="booked",
                    booked_by=player_id,
                )
                db.add(slot)
                await db.flush()
                logger.debug(f"Synthesized slot {slot.id} for {booking_date} {requested.time_range}")
                return slot
        else:
            result = await db.execute(select(Slot).where(Slot.id == requested.slot_id))
            slot = result.scalar_one_or_none()
            if slot is None:
                raise NotFoundError("Slot", requested.slot_id)

        if slot.turf_id != turf.id:
            raise SlotUnavailableError(slot.id, f"belongs to turf {slot.turf_id}")
        if slot.date != booking_date:
            raise SlotUnavailableError(slot.id, f"is on {slot.date}, not {booking_date}")

        # Guarded flip so a slot claimed in the meantime is never claimed twice
        claimed = await db.execute(
            update(Slot)
            .where(and_(Slot.id == slot.id, Slot.status == "available"))
            .values(status="booked", booked_by=player_id)
            .execution_options(synchronize_session=False)
        )
        if claimed.rowcount != 1:
            raise SlotUnavailableError(slot.id, f"status is {slot.status}")

        await db.refresh(slot)
        return slot

    def _check_no_duplicates(self, request: BookingCreate) -> None:
        seen = set()
        for requested in request.slots:
            key = requested.slot_id if requested.slot_id is not None else requested.time_range
            if key in seen:
                raise ValidationFailedError(f"Slot {key} requested more than once")
            seen.add(key)

    async def get_booking(self, db: AsyncSession, booking_id: int) -> Booking:
        result = await db.execute(
            select(Booking)
            .where(Booking.id == booking_id)
            .execution_options(populate_existing=True)
        )
        booking = result.scalar_one_or_none()

        if not booking:
            raise NotFoundError("Booking", booking_id)

        return booking

    async def list_player_bookings(
        self, db: AsyncSession, player_id: str, scope: str = "all"
    ) -> List[Booking]:
        """
        List a player's bookings, newest booking date first.

        ``upcoming`` holds pending or approved bookings from today on;
        ``past`` holds completed or cancelled bookings and anything dated
        before today.
        """
        result = await db.execute(
            select(Booking)
            .where(Booking.player_id == player_id)
            .order_by(Booking.booking_date.desc(), Booking.id.desc())
        )
        bookings = list(result.scalars().all())

        today = local_today()
        if scope == "upcoming":
            return [
                b for b in bookings
                if b.status in ("pending", "approved") and b.booking_date >= today
            ]
        if scope == "past":
            return [
                b for b in bookings
                if b.status in ("completed", "cancelled") or b.booking_date < today
            ]
        return bookings

    async def list_owner_bookings(
        self,
        db: AsyncSession,
        owner_id: str,
        status: Optional[str] = None,
        turf_id: Optional[int] = None,
    ) -> List[Booking]:
        """List bookings on every turf ``owner_id`` owns, optionally for one turf."""
        query = (
            select(Booking)
            .join(Turf, Booking.turf_id == Turf.id)
            .where(Turf.owner_id == owner_id)
        )
        if status:
            query = query.where(Booking.status == status)
        if turf_id is not None:
            query = query.where(Booking.turf_id == turf_id)

        result = await db.execute(query.order_by(Booking.booking_date.desc(), Booking.id.desc()))
        return list(result.scalars().all())

    async def approve_booking(self, db: AsyncSession, booking_id: int, owner_id: str) -> Booking:
        booking = await self._get_owner_booking(db, booking_id, owner_id)
        self._require_status(booking, ("pending",), "approve")

        booking.status = "approved"
        booking.payment_status = "unpaid"
        return await self._save(db, booking, f"approved by {owner_id}")

    async def reject_booking(self, db: AsyncSession, booking_id: int, owner_id: str) -> Booking:
        booking = await self._get_owner_booking(db, booking_id, owner_id)
        self._require_status(booking, ("pending",), "reject")

        booking.status = "cancelled"
        await self._release_slots(db, booking)
        return await self._save(db, booking, f"rejected by {owner_id}")

    async def cancel_booking(self, db: AsyncSession, booking_id: int, user: User) -> Booking:
        """
        Cancel a booking and free its slots.

        The player may cancel a pending or approved booking that is not yet
        paid. The turf owner may cancel an approved booking.
        """
        booking = await self.get_booking(db, booking_id)

        if booking.player_id == user.id:
            self._require_status(booking, ("pending", "approved"), "cancel")
            if booking.payment_status != "unpaid":
                raise InvalidStateError("Booking", booking_id, "paid", "cancel")
        elif booking.turf.owner_id == user.id:
            self._require_status(booking, ("approved",), "cancel")
        else:
            raise PermissionDeniedError(f"You cannot cancel booking {booking_id}")

        booking.status = "cancelled"
        await self._release_slots(db, booking)
        return await self._save(db, booking, f"cancelled by {user.id}")

    async def complete_booking(self, db: AsyncSession, booking_id: int, owner_id: str) -> Booking:
        booking = await self._get_owner_booking(db, booking_id, owner_id)
        self._require_status(booking, ("approved",), "complete")

        booking.status = "completed"
        return await self._save(db, booking, f"completed by {owner_id}")

    async def mark_booking_paid(self, db: AsyncSession, booking_id: int, owner_id: str) -> Booking:
        """Record a payment collected by the owner."""
        booking = await self._get_owner_booking(db, booking_id, owner_id)
        self._require_status(booking, ("pending", "approved", "completed"), "mark paid")

        booking.payment_status = "paid"
        return await self._save(db, booking, f"marked paid by {owner_id}")

    async def sweep_past_bookings(self, db: AsyncSession, today: date) -> dict:
        """
        Close out bookings dated before ``today``.

        Approved bookings become completed, pending ones are cancelled.

        Returns:
            Counts of completed and expired bookings
        """
        completed = await db.execute(
            update(Booking)
            .where(and_(Booking.status == "approved", Booking.booking_date < today))
            .values(status="completed")
            .execution_options(synchronize_session=False)
        )
        expired = await db.execute(
            update(Booking)
            .where(and_(Booking.status == "pending", Booking.booking_date < today))
            .values(status="cancelled")
            .execution_options(synchronize_session=False)
        )
        await db.commit()

        return {"completed": completed.rowcount, "expired": expired.rowcount}

    async def _get_owner_booking(self, db: AsyncSession, booking_id: int, owner_id: str) -> Booking:
        booking = await self.get_booking(db, booking_id)
        if booking.turf.owner_id != owner_id:
            logger.warning(f"User {owner_id} tried to manage booking {booking_id}")
            raise PermissionDeniedError(f"Booking {booking_id} is not on one of your turfs")
        return booking

    def _require_status(self, booking: Booking, allowed: tuple, action: str) -> None:
        if booking.status not in allowed:
            raise InvalidStateError("Booking", booking.id, booking.status, action)

    async def _release_slots(self, db: AsyncSession, booking: Booking) -> None:
        slot_ids = [d.slot_id for d in booking.slot_details if d.slot_id is not None]
        if not slot_ids:
            return

        result = await db.execute(
            update(Slot)
            .where(
                and_(
                    Slot.id.in_(slot_ids),
                    Slot.status == "booked",
                    Slot.booked_by == booking.player_id,
                )
            )
            .values(status="available", booked_by=None)
            .execution_options(synchronize_session=False)
        )
        logger.info(f"Released {result.rowcount} slot(s) of booking {booking.id}")

    async def _save(self, db: AsyncSession, booking: Booking, action: str) -> Booking:
        try:
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(f"Booking {booking.id} {action}")
        return await self.get_booking(db, booking.id)


# Singleton instance
booking_service = BookingService()
