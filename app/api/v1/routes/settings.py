"""Settings routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import CurrentUser, require_roles
from app.core.permissions import SCHOOL_MANAGERS
from app.schemas.settings import (
    ModuleAccessResponse,
    ModuleAccessUpdate,
    SettingsResponse,
    SettingsUpdate,
)
from app.services import settings as settings_service

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("", response_model=SettingsResponse)
async def get_settings(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: CurrentUser,
) -> SettingsResponse:
    """Get school settings, creating the defaults on first access."""
    school_settings = await settings_service.get_or_create_settings(db)
    return SettingsResponse.model_validate(school_settings)


@router.patch(
    "",
    response_model=SettingsResponse,
    dependencies=[Depends(require_roles(*SCHOOL_MANAGERS))],
)
async def update_settings(
    settings_data: SettingsUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SettingsResponse:
    """Update school settings."""
    school_settings = await settings_service.update_settings(db, settings_data)
    return SettingsResponse.model_validate(school_settings)


@router.get("/module-access", response_model=ModuleAccessResponse)
async def get_module_access(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: CurrentUser,
) -> ModuleAccessResponse:
    """Get the role -> feature access document."""
    module_access = await settings_service.get_module_access(db)
    return ModuleAccessResponse(module_access=module_access)


@router.put(
    "/module-access",
    response_model=ModuleAccessResponse,
    dependencies=[Depends(require_roles(*SCHOOL_MANAGERS))],
)
async def set_module_access(
    access_data: ModuleAccessUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ModuleAccessResponse:
    """Replace the role -> feature access document."""
    try:
        module_access = await settings_service.set_module_access(db, access_data.module_access)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    return ModuleAccessResponse(module_access=module_access)
