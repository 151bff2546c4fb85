"""Slot endpoints."""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from turfbook.api.deps import get_optional_user, require_owner, to_http_exception
from turfbook.core.database import get_db
from turfbook.core.exceptions import TurfBookError
from turfbook.models.user import User
from turfbook.schemas.slot import SlotCreate, SlotInDB, SlotStatusUpdate, SlotUpsert
from turfbook.services.slot_service import slot_service
from turfbook.services.turf_service import turf_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["slots"])


@router.get("/turfs/{turf_id}/slots", response_model=List[SlotInDB])
async def list_slots(
    turf_id: int,
    slot_date: Optional[date] = Query(default=None, alias="date", description="Only this date"),
    include_defaults: bool = Query(
        default=False,
        description="Return generated placeholder slots when the date has none",
    ),
    user: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """
    List a turf's slots ordered by date and start time.

    Hidden turfs only list slots for their owner.

    Args:
        turf_id: Turf ID
        slot_date: Optional date filter
        include_defaults: Generate default slots for an empty date
        user: Caller, if logged in
        db: Database session

    Returns:
        List of slots
    """
    try:
        await turf_service.get_visible_turf(db, turf_id, user.id if user else None)
        return await slot_service.list_slots(db, turf_id, slot_date, include_defaults)
    except TurfBookError as e:
        raise to_http_exception(e)


@router.put("/turfs/{turf_id}/slots", response_model=List[SlotInDB])
async def replace_slots(
    turf_id: int,
    slots: List[SlotUpsert],
    owner: User = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """
    Save the slot manager's full slot list for a turf.

    Slots without an id are created, stored slots not in the list are
    deleted. Booked slots must be included unchanged.
    """
    try:
        return await slot_service.replace_slots(db, turf_id, slots, owner.id)
    except TurfBookError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to save slots for turf {turf_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to update slots: {str(e)}")


@router.post("/turfs/{turf_id}/slots", response_model=SlotInDB, status_code=201)
async def add_slot(
    turf_id: int,
    slot: SlotCreate,
    owner: User = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """Add a single available or maintenance slot."""
    try:
        return await slot_service.add_slot(db, turf_id, slot, owner.id)
    except TurfBookError as e:
        raise to_http_exception(e)


@router.patch("/slots/{slot_id}", response_model=SlotInDB)
async def update_slot_status(
    slot_id: int,
    update: SlotStatusUpdate,
    owner: User = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """Switch a slot between available and maintenance."""
    try:
        return await slot_service.update_slot_status(db, slot_id, update.status, owner.id)
    except TurfBookError as e:
        raise to_http_exception(e)


@router.delete("/slots/{slot_id}", status_code=204)
async def delete_slot(
    slot_id: int,
    owner: User = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """Delete a slot. Booked slots cannot be deleted."""
    try:
        await slot_service.delete_slot(db, slot_id, owner.id)
    except TurfBookError as e:
        raise to_http_exception(e)
