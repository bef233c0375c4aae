"""
Authentication schemas.
"""
from datetime import datetime

from pydantic import EmailStr, Field

from opptym.models.user import UserRole
from opptym.schemas.common import BaseSchema, IDSchema, TimestampSchema


class LoginRequest(BaseSchema):
    """Login request schema."""

    email: EmailStr
    password: str = Field(min_length=8)


class RegisterRequest(BaseSchema):
    """Registration request schema."""

    email: EmailStr
    username: str = Field(min_length=3, max_length=30, pattern=r"^[A-Za-z0-9_.-]+$")
    password: str = Field(min_length=8)
    name: str | None = Field(default=None, max_length=100)


class TokenResponse(BaseSchema):
    """Token response schema."""

    access_token: str
    token_type: str = "bearer"


class UserResponse(IDSchema, TimestampSchema):
    """User response schema."""

    email: str
    username: str
    name: str | None = None
    role: UserRole
    plan: str
    is_banned: bool = False
    last_login_at: datetime | None = None


class AuthResponse(TokenResponse):
    """Authentication response with user info."""

    user: UserResponse
