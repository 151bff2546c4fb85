"""User and mock-auth schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Literal
from datetime import datetime

Role = Literal["owner", "player"]


class LoginRequest(BaseModel):
    """Schema for a mock login."""

    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(..., min_length=6)
    role: Role = "player"


class SignupRequest(LoginRequest):
    """Schema for a mock signup."""

    name: str = Field(..., min_length=2)


class UserInDB(BaseModel):
    """Schema for a user from the store."""

    id: str
    name: str
    email: str
    role: Role
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
