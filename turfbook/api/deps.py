"""Shared API dependencies: mock identity and error translation."""
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from turfbook.core.database import get_db
from turfbook.core.exceptions import (
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    SlotUnavailableError,
    TurfBookError,
    ValidationFailedError,
)
from turfbook.models.user import User
from turfbook.services.auth_service import auth_service

logger = logging.getLogger(__name__)

_STATUS_CODES = {
    NotFoundError: 404,
    PermissionDeniedError: 403,
    SlotUnavailableError: 409,
    InvalidStateError: 409,
    ValidationFailedError: 400,
}


def to_http_exception(error: TurfBookError) -> HTTPException:
    """Map a domain error to an HTTPException."""
    for error_type, status_code in _STATUS_CODES.items():
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=error.message)
    return HTTPException(status_code=400, detail=error.message)


async def get_optional_user(
    x_user_id: Optional[str] = Header(default=None),
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """Resolve the ``X-User-Id`` header to a user, if present and known."""
    if not x_user_id:
        return None
    return await auth_service.get_user(db, x_user_id)


async def get_current_user(
    user: Optional[User] = Depends(get_optional_user),
) -> User:
    """Require a logged-in user."""
    if user is None:
        raise HTTPException(
            status_code=401,
            detail="Login required. Send your user id in the X-User-Id header.",
        )
    return user


async def require_owner(user: User = Depends(get_current_user)) -> User:
    """Require a logged-in turf owner."""
    if user.role != "owner":
        logger.warning(f"Player {user.id} attempted an owner action")
        raise HTTPException(status_code=403, detail="Owner access required")
    return user
