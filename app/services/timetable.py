"""Timetable storage service.

Generating slots from a configuration is not part of this service; slots
are created and edited one at a time. The two unique constraints on
``timetable_slots`` keep a teacher or a class from being booked twice in
the same day and period of a version.
"""

import logging
from datetime import datetime
from uuid import UUID

from fastapi import status
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ServiceError
from app.models.school_class import SchoolClass
from app.models.subject import Subject
from app.models.teacher import Teacher
from app.models.timetable import DEFAULT_DAYS, TimetableConfig, TimetableSlot, TimetableVersion
from app.schemas.timetable import (
    TimetableConfigUpdate,
    TimetableSlotCreate,
    TimetableSlotUpdate,
    TimetableVersionCreate,
)

logger = logging.getLogger(__name__)

SLOT_CONFLICT_MESSAGE = (
    "The teacher or the class already has a lesson in this day and period"
)


# ============== Config ==============


async def get_active_config(db: AsyncSession) -> TimetableConfig:
    """Get the active configuration, creating one with defaults when absent."""
    result = await db.execute(
        select(TimetableConfig)
        .where(TimetableConfig.is_active.is_(True))
        .order_by(TimetableConfig.created_at.desc())
        .limit(1)
    )
    config = result.scalar_one_or_none()
    if config is not None:
        return config

    config = TimetableConfig(days_of_week=list(DEFAULT_DAYS), break_periods=[])
    db.add(config)
    await db.commit()
    await db.refresh(config)
    return config


async def save_config(db: AsyncSession, config_data: TimetableConfigUpdate) -> TimetableConfig:
    """Update the active configuration."""
    config = await get_active_config(db)
    update_data = config_data.model_dump(exclude_unset=True)

    if "break_periods" in update_data and config_data.break_periods is not None:
        update_data["break_periods"] = [
            b.model_dump(by_alias=True) for b in config_data.break_periods
        ]

    for field, value in update_data.items():
        setattr(config, field, value)

    await db.commit()
    await db.refresh(config)
    return config


# ============== Versions ==============


async def get_versions(db: AsyncSession) -> list[TimetableVersion]:
    """Get all versions, newest first."""
    result = await db.execute(
        select(TimetableVersion).order_by(TimetableVersion.created_at.desc())
    )
    return list(result.scalars().all())


async def get_version_by_id(db: AsyncSession, version_id: UUID) -> TimetableVersion | None:
    """Get version by ID."""
    result = await db.execute(select(TimetableVersion).where(TimetableVersion.id == version_id))
    return result.scalar_one_or_none()


async def create_version(
    db: AsyncSession,
    version_data: TimetableVersionCreate,
    created_by: UUID,
) -> TimetableVersion:
    """Create an inactive, unpublished version."""
    version = TimetableVersion(
        name=version_data.name,
        description=version_data.description,
        config_id=version_data.config_id,
        created_by=created_by,
    )
    db.add(version)
    await db.commit()
    await db.refresh(version)
    return version


async def activate_version(db: AsyncSession, version: TimetableVersion) -> TimetableVersion:
    """Make ``version`` the only active version."""
    await db.execute(
        update(TimetableVersion)
        .where(TimetableVersion.id != version.id)
        .values(is_active=False)
    )
    version.is_active = True
    await db.commit()
    await db.refresh(version)
    logger.info("Activated timetable version %s", version.id)
    return version


async def publish_version(db: AsyncSession, version: TimetableVersion) -> TimetableVersion:
    """Make ``version`` the only published version."""
    await db.execute(
        update(TimetableVersion)
        .where(TimetableVersion.id != version.id)
        .values(is_published=False)
    )
    version.is_published = True
    await db.commit()
    await db.refresh(version)
    logger.info("Published timetable version %s", version.id)
    return version


async def delete_version(db: AsyncSession, version: TimetableVersion) -> None:
    """Delete a version together with its slots."""
    await db.execute(
        delete(TimetableSlot).where(TimetableSlot.version_id == version.id)
    )
    await db.delete(version)
    await db.commit()


# ============== Slots ==============


async def get_slots(
    db: AsyncSession,
    version_id: UUID,
    day_of_week: str | None = None,
    class_id: UUID | None = None,
    teacher_id: UUID | None = None,
) -> list[TimetableSlot]:
    """Get the slots of a version ordered by day and period."""
    query = select(TimetableSlot).where(TimetableSlot.version_id == version_id)

    if day_of_week is not None:
        query = query.where(TimetableSlot.day_of_week == day_of_week)
    if class_id is not None:
        query = query.where(TimetableSlot.class_id == class_id)
    if teacher_id is not None:
        query = query.where(TimetableSlot.teacher_id == teacher_id)

    query = query.order_by(TimetableSlot.day_of_week, TimetableSlot.period_number)
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_slot_by_id(db: AsyncSession, slot_id: UUID) -> TimetableSlot | None:
    """Get slot by ID."""
    result = await db.execute(select(TimetableSlot).where(TimetableSlot.id == slot_id))
    return result.scalar_one_or_none()


SLOT_REFERENCES = (
    ("teacher_id", Teacher, "Teacher not found"),
    ("class_id", SchoolClass, "Class not found"),
    ("subject_id", Subject, "Subject not found"),
)


async def _check_slot_references(db: AsyncSession, values: dict) -> None:
    """Raise 404 for a teacher, class or subject that does not exist."""
    for field, model, message in SLOT_REFERENCES:
        if values.get(field) is not None and await db.get(model, values[field]) is None:
            raise ServiceError(message, status.HTTP_404_NOT_FOUND)


async def _commit_slot(db: AsyncSession, slot: TimetableSlot) -> TimetableSlot:
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ServiceError(SLOT_CONFLICT_MESSAGE, status.HTTP_409_CONFLICT)
    await db.refresh(slot)
    return slot


async def create_slot(
    db: AsyncSession,
    version: TimetableVersion,
    slot_data: TimetableSlotCreate,
) -> TimetableSlot:
    """
    Add a slot to a version.

    Raises:
        ServiceError: 404 when the teacher, class or subject does not exist;
            409 when the teacher or the class is already booked in that
            day and period.
    """
    values = slot_data.model_dump()
    await _check_slot_references(db, values)
    slot = TimetableSlot(version_id=version.id, **values)
    db.add(slot)
    return await _commit_slot(db, slot)


async def update_slot(
    db: AsyncSession,
    slot: TimetableSlot,
    slot_data: TimetableSlotUpdate,
    edited_by: UUID,
) -> TimetableSlot:
    """Manually edit a slot and record who edited it."""
    values = slot_data.model_dump(exclude_unset=True)
    await _check_slot_references(db, values)
    for field, value in values.items():
        if value is None and field not in ("start_time", "end_time", "room"):
            continue
        setattr(slot, field, value)

    slot.is_manually_edited = True
    slot.edited_at = datetime.now()
    slot.edited_by = edited_by
    return await _commit_slot(db, slot)


async def delete_slot(db: AsyncSession, slot: TimetableSlot) -> None:
    """Delete a slot."""
    await db.delete(slot)
    await db.commit()
