"""Turf listing service."""
import logging
from typing import List, Optional

from sqlalchemy import select, or_, func
from sqlalchemy.ext.asyncio import AsyncSession

from turfbook.core.exceptions import NotFoundError, PermissionDeniedError
from turfbook.models.turf import Turf
from turfbook.schemas.turf import TurfCreate, TurfUpdate

logger = logging.getLogger(__name__)


class TurfService:
    """Service for browsing and managing turfs."""

    async def list_visible_turfs(
        self,
        db: AsyncSession,
        search: Optional[str] = None,
        amenities: Optional[List[str]] = None,
        sort_by: str = "newest",
    ) -> List[Turf]:
        """
        List turfs players can browse.

        Args:
            db: Database session
            search: Case-insensitive substring matched against name or location
            amenities: Every listed amenity must be offered by the turf
            sort_by: price_asc, price_desc, rating or newest

        Returns:
            Matching visible turfs
        """
        query = select(Turf).where(Turf.is_visible.is_(True))

        if search:
            # Literal match, so % and _ in the search text are not wildcards
            query = query.where(
                or_(
                    Turf.name.icontains(search, autoescape=True),
                    Turf.location.icontains(search, autoescape=True),
                )
            )

        if sort_by == "price_asc":
            query = query.order_by(Turf.price_per_hour.asc(), Turf.id)
        elif sort_by == "price_desc":
            query = query.order_by(Turf.price_per_hour.desc(), Turf.id)
        elif sort_by == "rating":
            query = query.order_by(func.coalesce(Turf.average_rating, 0).desc(), Turf.id)
        else:
            query = query.order_by(Turf.created_at.desc(), Turf.id.desc())

        result = await db.execute(query)
        turfs = list(result.scalars().all())

        # Amenity tags are stored as JSON, so filter in Python
        if amenities:
            wanted = [a.lower() for a in amenities]
            turfs = [
                t for t in turfs
                if all(a in [x.lower() for x in (t.amenities or [])] for a in wanted)
            ]

        return turfs

    async def get_turf(self, db: AsyncSession, turf_id: int) -> Turf:
        """Get a turf by ID, raising NotFoundError if it does not exist."""
        result = await db.execute(select(Turf).where(Turf.id == turf_id))
        turf = result.scalar_one_or_none()

        if not turf:
            raise NotFoundError("Turf", turf_id)

        return turf

    async def get_visible_turf(
        self, db: AsyncSession, turf_id: int, viewer_id: Optional[str] = None
    ) -> Turf:
        """Get a turf, treating a hidden turf as missing for anyone but its owner."""
        turf = await self.get_turf(db, turf_id)
        if not turf.is_visible and turf.owner_id != viewer_id:
            raise NotFoundError("Turf", turf_id)
        return turf

    async def get_owned_turf(self, db: AsyncSession, turf_id: int, owner_id: str) -> Turf:
        """Get a turf and check that ``owner_id`` owns it."""
        turf = await self.get_turf(db, turf_id)
        if turf.owner_id != owner_id:
            logger.warning(f"User {owner_id} tried to manage turf {turf_id} owned by {turf.owner_id}")
            raise PermissionDeniedError(f"You are not the owner of turf {turf_id}")
        return turf

    async def list_owner_turfs(self, db: AsyncSession, owner_id: str) -> List[Turf]:
        result = await db.execute(
            select(Turf).where(Turf.owner_id == owner_id).order_by(Turf.id)
        )
        return list(result.scalars().all())

    async def create_turf(self, db: AsyncSession, data: TurfCreate, owner_id: str) -> Turf:
        """Create a turf owned by ``owner_id``."""
        turf_data = data.model_dump()
        if turf_data.get("average_rating") is None:
            turf_data["average_rating"] = 0.0
        if turf_data.get("review_count") is None:
            turf_data["review_count"] = 0

        turf = Turf(owner_id=owner_id, **turf_data)
        db.add(turf)
        await db.commit()
        await db.refresh(turf)

        logger.info(f"Owner {owner_id} created turf {turf.id} ({turf.name})")
        return turf

    async def update_turf(
        self, db: AsyncSession, turf_id: int, updates: TurfUpdate, owner_id: str
    ) -> Turf:
        """Apply a partial update to a turf the caller owns."""
        turf = await self.get_owned_turf(db, turf_id, owner_id)

        update_data = updates.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            # Only the phone number is nullable
            if value is None and field != "owner_phone_number":
                continue
            setattr(turf, field, value)

        await db.commit()
        await db.refresh(turf)

        logger.info(f"Owner {owner_id} updated turf {turf_id}: {sorted(update_data)}")
        return turf


# Singleton instance
turf_service = TurfService()
