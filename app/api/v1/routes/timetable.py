"""Timetable routes: configuration, versions and slots."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import CurrentUser, require_roles
from app.core.exceptions import ServiceError
from app.core.permissions import SCHOOL_MANAGERS
from app.models.user import User
from app.schemas.timetable import (
    TimetableConfigResponse,
    TimetableConfigUpdate,
    TimetableSlotCreate,
    TimetableSlotResponse,
    TimetableSlotUpdate,
    TimetableVersionCreate,
    TimetableVersionResponse,
)
from app.services import timetable as timetable_service

router = APIRouter(prefix="/timetable", tags=["Timetable"])

SchoolManager = Annotated[User, Depends(require_roles(*SCHOOL_MANAGERS))]


async def _get_version_or_404(db: AsyncSession, version_id: UUID):
    version = await timetable_service.get_version_by_id(db, version_id)
    if not version:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Timetable version not found",
        )
    return version


async def _get_slot_or_404(db: AsyncSession, slot_id: UUID):
    slot = await timetable_service.get_slot_by_id(db, slot_id)
    if not slot:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Timetable slot not found",
        )
    return slot


# ============== Config ==============


@router.get("/config", response_model=TimetableConfigResponse)
async def get_config(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: CurrentUser,
):
    """Get the active timetable configuration."""
    return await timetable_service.get_active_config(db)


@router.put("/config", response_model=TimetableConfigResponse)
async def save_config(
    config_data: TimetableConfigUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: SchoolManager,
):
    """Save the active timetable configuration."""
    return await timetable_service.save_config(db, config_data)


# ============== Versions ==============


@router.get("/versions", response_model=list[TimetableVersionResponse])
async def list_versions(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: CurrentUser,
):
    """List timetable versions, newest first."""
    return await timetable_service.get_versions(db)


@router.post(
    "/versions",
    response_model=TimetableVersionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_version(
    version_data: TimetableVersionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: SchoolManager,
):
    """Create a timetable version."""
    return await timetable_service.create_version(db, version_data, current_user.id)


@router.post("/versions/{version_id}/activate", response_model=TimetableVersionResponse)
async def activate_version(
    version_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: SchoolManager,
):
    """Activate a version; every other version is deactivated."""
    version = await _get_version_or_404(db, version_id)
    return await timetable_service.activate_version(db, version)


@router.post("/versions/{version_id}/publish", response_model=TimetableVersionResponse)
async def publish_version(
    version_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: SchoolManager,
):
    """Publish a version; every other version is unpublished."""
    version = await _get_version_or_404(db, version_id)
    return await timetable_service.publish_version(db, version)


@router.delete("/versions/{version_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_version(
    version_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: SchoolManager,
) -> None:
    """Delete a version and its slots."""
    version = await _get_version_or_404(db, version_id)
    await timetable_service.delete_version(db, version)


# ============== Slots ==============


@router.get("/versions/{version_id}/slots", response_model=list[TimetableSlotResponse])
async def list_slots(
    version_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: CurrentUser,
    day_of_week: str | None = None,
    class_id: UUID | None = None,
    teacher_id: UUID | None = None,
):
    """List the slots of a version."""
    await _get_version_or_404(db, version_id)
    return await timetable_service.get_slots(
        db, version_id, day_of_week=day_of_week, class_id=class_id, teacher_id=teacher_id
    )


@router.post(
    "/versions/{version_id}/slots",
    response_model=TimetableSlotResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_slot(
    version_id: UUID,
    slot_data: TimetableSlotCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: SchoolManager,
):
    """Add a slot to a version."""
    version = await _get_version_or_404(db, version_id)
    try:
        return await timetable_service.create_slot(db, version, slot_data)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.patch("/slots/{slot_id}", response_model=TimetableSlotResponse)
async def update_slot(
    slot_id: UUID,
    slot_data: TimetableSlotUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: SchoolManager,
):
    """Manually edit a slot."""
    slot = await _get_slot_or_404(db, slot_id)
    try:
        return await timetable_service.update_slot(db, slot, slot_data, current_user.id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/slots/{slot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_slot(
    slot_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: SchoolManager,
) -> None:
    """Delete a slot."""
    slot = await _get_slot_or_404(db, slot_id)
    await timetable_service.delete_slot(db, slot)
