"""Pydantic schemas."""

from app.schemas.auth import (
    Token,
    TokenData,
    LoginRequest,
    RefreshRequest,
    UserResponse,
)
from app.schemas.school import (
    SchoolCreate,
    SchoolUpdate,
    SchoolResponse,
    SchoolCodeResponse,
)
from app.schemas.settings import (
    SettingsUpdate,
    SettingsResponse,
    ModuleAccessUpdate,
    ModuleAccessResponse,
)

__all__ = [
    # Auth
    "Token",
    "TokenData",
    "LoginRequest",
    "RefreshRequest",
    "UserResponse",
    # School
    "SchoolCreate",
    "SchoolUpdate",
    "SchoolResponse",
    "SchoolCodeResponse",
    # Settings
    "SettingsUpdate",
    "SettingsResponse",
    "ModuleAccessUpdate",
    "ModuleAccessResponse",
]
