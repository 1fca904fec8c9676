"""Student transfer and enrollment routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import require_roles
from app.core.exceptions import ServiceError
from app.core.permissions import SCHOOL_MANAGERS
from app.models.transfer import TransferType
from app.models.user import User
from app.schemas.transfer import (
    EnrollmentCreate,
    EnrollmentResponse,
    TransferCreate,
    TransferResponse,
)
from app.services import transfer as transfer_service

router = APIRouter(prefix="/transfers", tags=["Transfers"])
enrollments_router = APIRouter(prefix="/enrollments", tags=["Enrollments"])

SchoolManager = Annotated[User, Depends(require_roles(*SCHOOL_MANAGERS))]


@router.post("", response_model=TransferResponse, status_code=status.HTTP_201_CREATED)
async def create_transfer(
    transfer_data: TransferCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: SchoolManager,
):
    """
    Initiate a student transfer.

    - internal: moves the student to another class
    - external: records the student leaving for another school
    """
    try:
        return await transfer_service.create_transfer(db, transfer_data, current_user.id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=list[TransferResponse])
async def list_transfers(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: SchoolManager,
    transfer_type: TransferType | None = None,
    student_id: UUID | None = None,
):
    """List transfers, newest first."""
    return await transfer_service.get_transfers(
        db, transfer_type=transfer_type, student_id=student_id
    )


@router.get("/{transfer_id}", response_model=TransferResponse)
async def get_transfer(
    transfer_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: SchoolManager,
):
    """Get a transfer by ID."""
    transfer = await transfer_service.get_transfer_by_id(db, transfer_id)
    if not transfer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Transfer not found",
        )
    return transfer


@enrollments_router.post(
    "", response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED
)
async def create_enrollment(
    enrollment_data: EnrollmentCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: SchoolManager,
):
    """Enroll a student in a class."""
    try:
        return await transfer_service.create_enrollment(db, enrollment_data, current_user.id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
