"""Booking endpoints."""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from turfbook.api.deps import get_current_user, require_owner, to_http_exception
from turfbook.core.database import get_db
from turfbook.core.exceptions import TurfBookError
from turfbook.models.user import User
from turfbook.schemas.booking import BookingCreate, BookingInDB, BookingScope
from turfbook.services.booking_service import booking_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingInDB, status_code=201)
async def create_booking(
    booking: BookingCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Book one or more slots of a turf on a single date.

    All requested slots are booked or none are. The booking starts as
    pending and unpaid.

    Args:
        booking: Turf, date and slots
        user: Booking player
        db: Database session

    Returns:
        Created booking
    """
    try:
        return await booking_service.create_booking(db, user, booking)
    except TurfBookError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to create booking at turf {booking.turf_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to create booking: {str(e)}")


@router.get("/mine", response_model=List[BookingInDB])
async def list_my_bookings(
    scope: BookingScope = Query(default="all", description="all, upcoming or past"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the caller's bookings."""
    return await booking_service.list_player_bookings(db, user.id, scope)


@router.post("/{booking_id}/cancel", response_model=BookingInDB)
async def cancel_booking(
    booking_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Cancel a booking and release its slots.

    Players can cancel unpaid pending or approved bookings; owners can
    cancel approved bookings on their turfs.
    """
    try:
        return await booking_service.cancel_booking(db, booking_id, user)
    except TurfBookError as e:
        raise to_http_exception(e)


@router.post("/{booking_id}/approve", response_model=BookingInDB)
async def approve_booking(
    booking_id: int,
    owner: User = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """Approve a pending booking."""
    try:
        return await booking_service.approve_booking(db, booking_id, owner.id)
    except TurfBookError as e:
        raise to_http_exception(e)


@router.post("/{booking_id}/reject", response_model=BookingInDB)
async def reject_booking(
    booking_id: int,
    owner: User = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """Reject a pending booking and release its slots."""
    try:
        return await booking_service.reject_booking(db, booking_id, owner.id)
    except TurfBookError as e:
        raise to_http_exception(e)


@router.post("/{booking_id}/complete", response_model=BookingInDB)
async def complete_booking(
    booking_id: int,
    owner: User = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """Mark an approved booking as played."""
    try:
        return await booking_service.complete_booking(db, booking_id, owner.id)
    except TurfBookError as e:
        raise to_http_exception(e)


@router.post("/{booking_id}/mark-paid", response_model=BookingInDB)
async def mark_booking_paid(
    booking_id: int,
    owner: User = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """Record that the owner collected payment for a booking."""
    try:
        return await booking_service.mark_booking_paid(db, booking_id, owner.id)
    except TurfBookError as e:
        raise to_http_exception(e)
