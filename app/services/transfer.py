"""Student transfer and enrollment service.

Transfers are append-only history. Every transfer or new enrollment
closes the student's active enrollment in the same transaction.
"""

import logging
from datetime import date
from uuid import UUID

from fastapi import status
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ServiceError
from app.models.school_class import SchoolClass
from app.models.student import Student
from app.models.transfer import StudentEnrollment, StudentTransfer, TransferType
from app.schemas.transfer import EnrollmentCreate, TransferCreate

logger = logging.getLogger(__name__)


async def _get_student(db: AsyncSession, student_id: UUID) -> Student:
    result = await db.execute(select(Student).where(Student.id == student_id))
    student = result.scalar_one_or_none()
    if student is None:
        raise ServiceError("Student not found", status.HTTP_404_NOT_FOUND)
    return student


async def _get_active_class(db: AsyncSession, class_id: UUID) -> SchoolClass:
    result = await db.execute(select(SchoolClass).where(SchoolClass.id == class_id))
    school_class = result.scalar_one_or_none()
    if school_class is None:
        raise ServiceError("Class not found", status.HTTP_404_NOT_FOUND)
    if not school_class.is_active:
        raise ServiceError("Cannot move a student to an inactive class")
    return school_class


async def _withdraw_active_enrollments(
    db: AsyncSession,
    student_id: UUID,
    withdrawal_date: date,
    withdrawn_by_user_id: UUID,
) -> None:
    await db.execute(
        update(StudentEnrollment)
        .where(
            StudentEnrollment.student_id == student_id,
            StudentEnrollment.is_active.is_(True),
        )
        .values(
            is_active=False,
            withdrawal_date=withdrawal_date,
            withdrawn_by_user_id=withdrawn_by_user_id,
        )
    )


async def create_transfer(
    db: AsyncSession,
    transfer_data: TransferCreate,
    processed_by_user_id: UUID,
) -> StudentTransfer:
    """
    Record a transfer and apply it to the student.

    Internal: the student moves to ``new_class_id`` and gets a new active
    enrollment there. External: the student is deactivated and removed
    from their class. Either way the previous active enrollment is closed.

    Raises:
        ServiceError: 404 for an unknown student or class, 400 when the
            student is already in the target class or the class is inactive.
    """
    student = await _get_student(db, transfer_data.student_id)
    effective_date = transfer_data.effective_date or date.today()
    previous_class_id = student.class_id

    if transfer_data.transfer_type == TransferType.INTERNAL:
        if student.class_id == transfer_data.new_class_id:
            raise ServiceError("Student is already in the selected class")
        await _get_active_class(db, transfer_data.new_class_id)

    transfer = StudentTransfer(
        student_id=student.id,
        transfer_type=transfer_data.transfer_type,
        previous_class_id=previous_class_id,
        new_class_id=(
            transfer_data.new_class_id
            if transfer_data.transfer_type == TransferType.INTERNAL
            else None
        ),
        destination_school=(
            transfer_data.destination_school
            if transfer_data.transfer_type == TransferType.EXTERNAL
            else None
        ),
        reason=transfer_data.reason or None,
        transfer_date=date.today(),
        effective_date=effective_date,
        processed_by_user_id=processed_by_user_id,
        notes=transfer_data.notes or None,
    )
    db.add(transfer)

    await _withdraw_active_enrollments(db, student.id, effective_date, processed_by_user_id)

    if transfer_data.transfer_type == TransferType.INTERNAL:
        student.class_id = transfer_data.new_class_id
        db.add(
            StudentEnrollment(
                student_id=student.id,
                class_id=transfer_data.new_class_id,
                enrollment_date=effective_date,
                enrolled_by_user_id=processed_by_user_id,
            )
        )
        logger.info(
            "Student %s transferred from class %s to %s",
            student.student_number,
            previous_class_id,
            transfer_data.new_class_id,
        )
    else:
        student.is_active = False
        student.class_id = None
        logger.info(
            "Student %s transferred out to %s",
            student.student_number,
            transfer_data.destination_school,
        )

    await db.commit()
    await db.refresh(transfer)
    return transfer


async def get_transfers(
    db: AsyncSession,
    transfer_type: TransferType | None = None,
    student_id: UUID | None = None,
) -> list[StudentTransfer]:
    """Get transfers, newest first."""
    query = select(StudentTransfer)

    if transfer_type is not None:
        query = query.where(StudentTransfer.transfer_type == transfer_type)

    if student_id is not None:
        query = query.where(StudentTransfer.student_id == student_id)

    query = query.order_by(StudentTransfer.transfer_date.desc(), StudentTransfer.created_at.desc())
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_transfer_by_id(db: AsyncSession, transfer_id: UUID) -> StudentTransfer | None:
    """Get transfer by ID."""
    result = await db.execute(select(StudentTransfer).where(StudentTransfer.id == transfer_id))
    return result.scalar_one_or_none()


async def create_enrollment(
    db: AsyncSession,
    enrollment_data: EnrollmentCreate,
    enrolled_by_user_id: UUID,
) -> StudentEnrollment:
    """
    Enroll a student in a class, closing any active enrollment and
    moving the student to the class.
    """
    student = await _get_student(db, enrollment_data.student_id)
    await _get_active_class(db, enrollment_data.class_id)
    enrollment_date = enrollment_data.enrollment_date or date.today()

    await _withdraw_active_enrollments(db, student.id, enrollment_date, enrolled_by_user_id)

    enrollment = StudentEnrollment(
        student_id=student.id,
        class_id=enrollment_data.class_id,
        enrollment_date=enrollment_date,
        enrolled_by_user_id=enrolled_by_user_id,
        notes=enrollment_data.notes,
    )
    db.add(enrollment)
    student.class_id = enrollment_data.class_id
    student.is_active = True

    await db.commit()
    await db.refresh(enrollment)
    return enrollment


async def get_enrollments(db: AsyncSession, student_id: UUID) -> list[StudentEnrollment]:
    """Get the enrollment history of a student, newest first."""
    result = await db.execute(
        select(StudentEnrollment)
        .where(StudentEnrollment.student_id == student_id)
        .order_by(StudentEnrollment.enrollment_date.desc(), StudentEnrollment.created_at.desc())
    )
    return list(result.scalars().all())
