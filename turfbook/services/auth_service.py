"""Mock authentication service.

There is no credential check. Logging in maps a role to a fixed demo
identity; signing up mints a fresh uid. Callers then identify themselves
with the ``X-User-Id`` header.
"""
import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from turfbook.models.user import User

logger = logging.getLogger(__name__)

MOCK_IDENTITIES = {
    "owner": ("mock-owner-uid", "Owner User"),
    "player": ("mock-player-uid", "Player User"),
}


class AuthService:
    """Service for the mock login/signup flow."""

    async def login(self, db: AsyncSession, email: str, role: str) -> User:
        """
        Log in as the demo identity for a role.

        Args:
            db: Database session
            email: Email entered on the login form
            role: "owner" or "player"

        Returns:
            The demo user, with its email updated
        """
        uid, name = MOCK_IDENTITIES[role]
        user = await self.get_user(db, uid)

        if user is None:
            user = User(id=uid, name=name, email=email, role=role)
            db.add(user)
        else:
            user.email = email

        await db.commit()
        await db.refresh(user)

        logger.info(f"Mock login for {email} as {role} ({uid})")
        return user

    async def signup(self, db: AsyncSession, name: str, email: str, role: str) -> User:
        """Create a new mock user with a freshly minted uid."""
        uid = f"mock-{role}-{uuid.uuid4().hex[:12]}"
        user = User(id=uid, name=name, email=email, role=role)
        db.add(user)
        await db.commit()
        await db.refresh(user)

        logger.info(f"Mock signup for {email} as {role} ({uid})")
        return user

    async def get_user(self, db: AsyncSession, user_id: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()


# Singleton instance
auth_service = AuthService()
