"""Turf endpoints."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from turfbook.api.deps import get_optional_user, require_owner, to_http_exception
from turfbook.core.database import get_db
from turfbook.core.exceptions import TurfBookError
from turfbook.models.user import User
from turfbook.schemas.turf import TurfCreate, TurfInDB, TurfSort, TurfUpdate
from turfbook.services.turf_service import turf_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/turfs", tags=["turfs"])


@router.get("", response_model=List[TurfInDB])
async def list_turfs(
    search: Optional[str] = Query(default=None, description="Match against name or location"),
    amenities: Optional[List[str]] = Query(default=None, description="Required amenities"),
    sort_by: TurfSort = Query(default="newest"),
    db: AsyncSession = Depends(get_db),
):
    """
    Browse visible turfs.

    Args:
        search: Case-insensitive search over name and location
        amenities: Only turfs offering every listed amenity
        sort_by: price_asc, price_desc, rating or newest
        db: Database session

    Returns:
        List of visible turfs
    """
    return await turf_service.list_visible_turfs(db, search, amenities, sort_by)


@router.post("", response_model=TurfInDB, status_code=201)
async def create_turf(
    turf: TurfCreate,
    owner: User = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """List a new turf owned by the caller."""
    try:
        return await turf_service.create_turf(db, turf, owner.id)
    except Exception as e:
        logger.error(f"Failed to create turf for {owner.id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to create turf: {str(e)}")


@router.get("/{turf_id}", response_model=TurfInDB)
async def get_turf(
    turf_id: int,
    user: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Get a turf by ID.

    Hidden turfs are only returned to their owner.
    """
    try:
        return await turf_service.get_visible_turf(db, turf_id, user.id if user else None)
    except TurfBookError as e:
        raise to_http_exception(e)


@router.patch("/{turf_id}", response_model=TurfInDB)
async def update_turf(
    turf_id: int,
    turf_update: TurfUpdate,
    owner: User = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """
    Update a turf's details or visibility.

    Args:
        turf_id: Turf ID
        turf_update: Fields to update
        owner: Calling owner
        db: Database session

    Returns:
        Updated turf
    """
    try:
        return await turf_service.update_turf(db, turf_id, turf_update, owner.id)
    except TurfBookError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to update turf {turf_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to update turf: {str(e)}")
