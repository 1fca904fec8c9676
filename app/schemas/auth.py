"""Authentication schemas."""

from uuid import UUID

from pydantic import BaseModel, Field


class Token(BaseModel):
    """JWT token response."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    """Refresh token request."""

    refresh_token: str


class TokenData(BaseModel):
    """Data extracted from JWT token."""

    user_id: UUID | None = None


class LoginRequest(BaseModel):
    """Login request schema. ``username`` may also be an email address."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)

    model_config = {"str_strip_whitespace": True}


class UserResponse(BaseModel):
    """Authenticated user as returned by ``/auth/me``."""

    id: UUID
    username: str | None
    email: str | None
    role: str
    is_active: bool
    is_demo: bool
    must_change_password: bool

    model_config = {"from_attributes": True}
