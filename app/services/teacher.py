"""Teacher and teacher-class assignment service."""

import logging
from uuid import UUID

from fastapi import status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ServiceError
from app.models.teacher import Teacher
from app.models.teacher_class import TeacherClass
from app.schemas.teacher import TeacherCreate

logger = logging.getLogger(__name__)


async def get_teacher_by_id(db: AsyncSession, teacher_id: UUID) -> Teacher | None:
    """Get teacher by ID."""
    result = await db.execute(select(Teacher).where(Teacher.id == teacher_id))
    return result.scalar_one_or_none()


async def get_teachers(db: AsyncSession) -> list[Teacher]:
    """Get all teachers ordered by name."""
    result = await db.execute(select(Teacher).order_by(Teacher.last_name, Teacher.first_name))
    return list(result.scalars().all())


async def create_teacher(db: AsyncSession, teacher_data: TeacherCreate) -> Teacher:
    """Create a teacher. The staff number (teacher_id) is unique."""
    teacher = Teacher(**teacher_data.model_dump())
    db.add(teacher)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ServiceError(
            "A teacher with that teacher ID already exists",
            status.HTTP_409_CONFLICT,
        )
    await db.refresh(teacher)
    return teacher


async def get_teacher_classes(db: AsyncSession, teacher_id: UUID) -> list[TeacherClass]:
    """Get the class assignments of a teacher."""
    result = await db.execute(
        select(TeacherClass).where(TeacherClass.teacher_id == teacher_id)
    )
    return list(result.scalars().all())


async def assign_class(db: AsyncSession, teacher_id: UUID, class_id: UUID) -> TeacherClass:
    """
    Assign a class to a teacher.

    Raises:
        ServiceError: 409 when the pair is already assigned.
    """
    assignment = TeacherClass(teacher_id=teacher_id, class_id=class_id)
    db.add(assignment)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ServiceError(
            "Class is already assigned to this teacher",
            status.HTTP_409_CONFLICT,
        )
    await db.refresh(assignment)
    logger.info("Assigned class %s to teacher %s", class_id, teacher_id)
    return assignment


async def unassign_class(db: AsyncSession, teacher_id: UUID, class_id: UUID) -> None:
    """
    Remove a teacher-class assignment.

    Raises:
        ServiceError: 404 when the pair is not assigned.
    """
    result = await db.execute(
        select(TeacherClass).where(
            TeacherClass.teacher_id == teacher_id,
            TeacherClass.class_id == class_id,
        )
    )
    assignment = result.scalar_one_or_none()
    if assignment is None:
        raise ServiceError("Assignment not found", status.HTTP_404_NOT_FOUND)

    await db.delete(assignment)
    await db.commit()
