"""Student service layer."""

from datetime import date
from uuid import UUID

from fastapi import status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ServiceError
from app.models.student import Student
from app.models.transfer import StudentEnrollment
from app.schemas.student import StudentCreate


async def get_student_by_id(db: AsyncSession, student_id: UUID) -> Student | None:
    """Get student by ID."""
    result = await db.execute(select(Student).where(Student.id == student_id))
    return result.scalar_one_or_none()


async def get_students(
    db: AsyncSession,
    class_id: UUID | None = None,
    is_active: bool | None = None,
) -> list[Student]:
    """Get students with optional filters, ordered by name."""
    query = select(Student)

    if class_id is not None:
        query = query.where(Student.class_id == class_id)

    if is_active is not None:
        query = query.where(Student.is_active == is_active)

    query = query.order_by(Student.last_name, Student.first_name)
    result = await db.execute(query)
    return list(result.scalars().all())


async def create_student(
    db: AsyncSession,
    student_data: StudentCreate,
    enrolled_by_user_id: UUID,
) -> Student:
    """
    Create a student. A student created in a class also gets an active
    enrollment in it.

    Raises:
        ServiceError: 409 when the student number is taken.
    """
    student = Student(**student_data.model_dump())
    db.add(student)
    try:
        await db.flush()
        if student.class_id is not None:
            db.add(
                StudentEnrollment(
                    student_id=student.id,
                    class_id=student.class_id,
                    enrollment_date=date.today(),
                    enrolled_by_user_id=enrolled_by_user_id,
                )
            )
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ServiceError(
            "A student with that student number already exists",
            status.HTTP_409_CONFLICT,
        )
    await db.refresh(student)
    return student
