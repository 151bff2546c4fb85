"""Owner dashboard endpoints."""
import logging
from datetime import date, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from turfbook.api.deps import require_owner, to_http_exception
from turfbook.core.clock import local_today
from turfbook.core.database import get_db
from turfbook.core.exceptions import TurfBookError
from turfbook.models.user import User
from turfbook.schemas.analytics import OwnerAnalytics, OwnerDashboard, UtilizationHistory
from turfbook.schemas.booking import BookingInDB, BookingStatus
from turfbook.schemas.turf import TurfInDB
from turfbook.services.analytics_service import analytics_service
from turfbook.services.booking_service import booking_service
from turfbook.services.turf_service import turf_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/owner", tags=["owner"])


@router.get("/turfs", response_model=List[TurfInDB])
async def list_my_turfs(
    owner: User = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """List every turf the caller owns, hidden ones included."""
    return await turf_service.list_owner_turfs(db, owner.id)


@router.get("/bookings", response_model=List[BookingInDB])
async def list_turf_bookings(
    status: Optional[BookingStatus] = Query(default=None, description="Filter by status"),
    turf_id: Optional[int] = Query(default=None, description="Only bookings on this turf"),
    owner: User = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """List bookings across the caller's turfs."""
    return await booking_service.list_owner_bookings(db, owner.id, status, turf_id)


@router.get("/dashboard", response_model=OwnerDashboard)
async def get_dashboard(
    owner: User = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """Turf count, upcoming bookings and revenue."""
    return await analytics_service.get_dashboard(db, owner.id)


@router.get("/analytics", response_model=OwnerAnalytics)
async def get_analytics(
    owner: User = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """Bookings per day, most booked slots, earnings and rating distribution."""
    try:
        return await analytics_service.get_analytics(db, owner.id)
    except Exception as e:
        logger.error(f"Failed to build analytics for {owner.id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to get analytics: {str(e)}")


@router.get("/turfs/{turf_id}/utilization", response_model=UtilizationHistory)
async def get_utilization(
    turf_id: int,
    from_date: date = Query(default=None, description="Start date (defaults to today)"),
    to_date: date = Query(default=None, description="End date (defaults to 7 days ahead)"),
    owner: User = Depends(require_owner),
    db: AsyncSession = Depends(get_db),
):
    """
    Get daily slot utilization for one of the caller's turfs.

    Args:
        turf_id: Turf ID
        from_date: Start date (defaults to today)
        to_date: End date (defaults to 7 days after from_date)
        owner: Calling owner
        db: Database session

    Returns:
        Utilization per day that has slots
    """
    if from_date is None:
        from_date = local_today()
    if to_date is None:
        to_date = from_date + timedelta(days=7)

    if from_date > to_date:
        raise HTTPException(
            status_code=400,
            detail="from_date must be before or equal to to_date",
        )

    try:
        return await analytics_service.get_daily_utilization(
            db, turf_id, owner.id, from_date, to_date
        )
    except TurfBookError as e:
        raise to_http_exception(e)
