"""Mock authentication endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from turfbook.api.deps import get_current_user
from turfbook.core.database import get_db
from turfbook.models.user import User
from turfbook.schemas.user import LoginRequest, SignupRequest, UserInDB
from turfbook.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=UserInDB)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Log in as the demo owner or player.

    The password is not checked. Use the returned ``id`` as the
    ``X-User-Id`` header on later requests.
    """
    return await auth_service.login(db, credentials.email, credentials.role)


@router.post("/signup", response_model=UserInDB, status_code=201)
async def signup(
    payload: SignupRequest,
    db: AsyncSession = Depends(get_db),
):
    """Create a new mock user."""
    return await auth_service.signup(db, payload.name, payload.email, payload.role)


@router.get("/me", response_model=UserInDB)
async def me(user: User = Depends(get_current_user)):
    """Return the user identified by the X-User-Id header."""
    return user
