"""SchoolClass service layer."""

from uuid import UUID

from fastapi import status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ServiceError
from app.models.school_class import SchoolClass
from app.schemas.school_class import SchoolClassCreate, SchoolClassUpdate


async def get_school_class_by_id(
    db: AsyncSession, class_id: UUID
) -> SchoolClass | None:
    """Get a school class by ID."""
    result = await db.execute(select(SchoolClass).where(SchoolClass.id == class_id))
    return result.scalar_one_or_none()


async def get_school_classes(
    db: AsyncSession,
    is_active: bool | None = None,
) -> list[SchoolClass]:
    """Get all school classes ordered by form, then name."""
    query = select(SchoolClass)

    if is_active is not None:
        query = query.where(SchoolClass.is_active == is_active)

    query = query.order_by(SchoolClass.form, SchoolClass.name)
    result = await db.execute(query)
    return list(result.scalars().all())


async def _commit_class(db: AsyncSession, school_class: SchoolClass) -> SchoolClass:
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ServiceError("A class with that name already exists", status.HTTP_409_CONFLICT)
    await db.refresh(school_class)
    return school_class


async def create_school_class(
    db: AsyncSession, class_data: SchoolClassCreate
) -> SchoolClass:
    """Create a new school class. Names are unique."""
    school_class = SchoolClass(
        name=class_data.name,
        form=class_data.form,
        description=class_data.description,
    )
    db.add(school_class)
    return await _commit_class(db, school_class)


async def update_school_class(
    db: AsyncSession, school_class: SchoolClass, class_data: SchoolClassUpdate
) -> SchoolClass:
    """Update a school class."""
    for field, value in class_data.model_dump(exclude_unset=True).items():
        if value is None and field != "description":
            continue
        setattr(school_class, field, value)
    return await _commit_class(db, school_class)
