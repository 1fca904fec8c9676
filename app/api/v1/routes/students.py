"""Student routes, including transfer and enrollment history."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import require_feature, require_roles
from app.core.exceptions import ServiceError
from app.core.permissions import SCHOOL_MANAGERS, Feature
from app.models.user import User
from app.schemas.student import StudentCreate, StudentResponse
from app.schemas.transfer import EnrollmentResponse, TransferResponse
from app.services import student as student_service
from app.services import transfer as transfer_service

router = APIRouter(prefix="/students", tags=["Students"])


async def _get_student_or_404(db: AsyncSession, student_id: UUID):
    student = await student_service.get_student_by_id(db, student_id)
    if not student:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found",
        )
    return student


@router.get(
    "",
    response_model=list[StudentResponse],
    dependencies=[Depends(require_feature(Feature.STUDENTS))],
)
async def list_students(
    db: Annotated[AsyncSession, Depends(get_db)],
    class_id: UUID | None = None,
    is_active: bool | None = None,
):
    """List students with optional filters."""
    return await student_service.get_students(db, class_id=class_id, is_active=is_active)


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
async def create_student(
    student_data: StudentCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_roles(*SCHOOL_MANAGERS))],
):
    """Create a student."""
    try:
        return await student_service.create_student(db, student_data, current_user.id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get(
    "/{student_id}",
    response_model=StudentResponse,
    dependencies=[Depends(require_feature(Feature.STUDENTS))],
)
async def get_student(
    student_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get a student by ID."""
    return await _get_student_or_404(db, student_id)


@router.get(
    "/{student_id}/transfers",
    response_model=list[TransferResponse],
    dependencies=[Depends(require_roles(*SCHOOL_MANAGERS))],
)
async def list_student_transfers(
    student_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Transfer history of a student, newest first."""
    await _get_student_or_404(db, student_id)
    return await transfer_service.get_transfers(db, student_id=student_id)


@router.get(
    "/{student_id}/enrollments",
    response_model=list[EnrollmentResponse],
    dependencies=[Depends(require_roles(*SCHOOL_MANAGERS))],
)
async def list_student_enrollments(
    student_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Enrollment history of a student, newest first."""
    await _get_student_or_404(db, student_id)
    return await transfer_service.get_enrollments(db, student_id)
