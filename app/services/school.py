"""School service."""

import logging
import secrets
from uuid import UUID

from fastapi import status
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import ServiceError
from app.models.school import School
from app.schemas.school import SchoolCreate, SchoolUpdate

logger = logging.getLogger(__name__)


async def get_school_by_id(db: AsyncSession, school_id: UUID) -> School | None:
    """Get school by ID."""
    result = await db.execute(select(School).where(School.id == school_id))
    return result.scalar_one_or_none()


async def get_school_by_code(db: AsyncSession, code: str) -> School | None:
    """Get school by code, ignoring case."""
    result = await db.execute(
        select(School).where(func.lower(School.schoolid) == code.lower())
    )
    return result.scalar_one_or_none()


async def get_schools(db: AsyncSession) -> list[School]:
    """Get all schools ordered by name."""
    result = await db.execute(select(School).order_by(School.name.asc()))
    return list(result.scalars().all())


async def get_school_profile(db: AsyncSession) -> School | None:
    """Get the profile school: the oldest active one."""
    result = await db.execute(
        select(School)
        .where(School.is_active.is_(True))
        .order_by(School.created_at.asc(), School.name.asc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def _commit_school(db: AsyncSession, school: School) -> School:
    try:
        await db.commit()
    except IntegrityError:
        # The unique index on the code is the final arbiter under concurrency
        await db.rollback()
        raise ServiceError(
            "A school with that code or name already exists",
            status.HTTP_409_CONFLICT,
        )
    await db.refresh(school)
    return school


async def create_school(db: AsyncSession, school_data: SchoolCreate) -> School:
    """Create a new school.

    Raises:
        ServiceError: 409 when the name or code is already taken.
    """
    result = await db.execute(
        select(School.id).where(
            or_(
                func.lower(School.schoolid) == school_data.code.lower(),
                School.name == school_data.name,
            )
        )
    )
    if result.first() is not None:
        raise ServiceError(
            "A school with that code or name already exists",
            status.HTTP_409_CONFLICT,
        )

    school = School(
        name=school_data.name,
        schoolid=school_data.code,
        logo_url=school_data.logo_url,
        address=school_data.address,
        phone=school_data.phone,
        subscription_end_date=school_data.subscription_end_date,
    )

    db.add(school)
    school = await _commit_school(db, school)
    logger.info("Created school %s (%s)", school.name, school.schoolid)
    return school


async def update_school(
    db: AsyncSession,
    school: School,
    school_data: SchoolUpdate,
) -> School:
    """Update a school."""
    update_data = school_data.model_dump(exclude_unset=True)

    if "code" in update_data:
        code = update_data.pop("code")
        if code is not None:
            existing = await get_school_by_code(db, code)
            if existing is not None and existing.id != school.id:
                raise ServiceError(
                    "A school with that code or name already exists",
                    status.HTTP_409_CONFLICT,
                )
            school.schoolid = code

    for field, value in update_data.items():
        if field in ("name", "is_active") and value is None:
            continue
        setattr(school, field, value)

    return await _commit_school(db, school)


def _code_candidate() -> str:
    digits = f"{secrets.randbelow(1_000_000):06d}"
    return f"{settings.SCHOOL_CODE_PREFIX}{digits}"


async def generate_school_code(db: AsyncSession) -> str:
    """
    Generate a school code not used by any school yet.

    Candidates are the configured prefix plus six digits. Uniqueness is only
    checked at generation time; the unique index decides on creation.

    Raises:
        ServiceError: 503 when no free code is found within the attempt limit.
    """
    for _ in range(settings.SCHOOL_CODE_MAX_ATTEMPTS):
        candidate = _code_candidate()
        if await get_school_by_code(db, candidate) is None:
            return candidate

    logger.warning(
        "No free school code after %d attempts", settings.SCHOOL_CODE_MAX_ATTEMPTS
    )
    raise ServiceError(
        "Unable to generate a unique school code right now. Please try again.",
        status.HTTP_503_SERVICE_UNAVAILABLE,
    )
