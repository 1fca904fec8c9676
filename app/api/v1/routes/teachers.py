"""Teacher routes, including class assignments."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import require_feature, require_roles
from app.core.exceptions import ServiceError
from app.core.permissions import SCHOOL_MANAGERS, Feature
from app.schemas.teacher import (
    TeacherClassAssign,
    TeacherClassResponse,
    TeacherCreate,
    TeacherResponse,
)
from app.services import school_class as school_class_service
from app.services import teacher as teacher_service

router = APIRouter(prefix="/teachers", tags=["Teachers"])


async def _get_teacher_or_404(db: AsyncSession, teacher_id: UUID):
    teacher = await teacher_service.get_teacher_by_id(db, teacher_id)
    if not teacher:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Teacher not found",
        )
    return teacher


@router.get(
    "",
    response_model=list[TeacherResponse],
    dependencies=[Depends(require_feature(Feature.TEACHERS))],
)
async def list_teachers(db: Annotated[AsyncSession, Depends(get_db)]):
    """List teachers."""
    return await teacher_service.get_teachers(db)


@router.post(
    "",
    response_model=TeacherResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(*SCHOOL_MANAGERS))],
)
async def create_teacher(
    teacher_data: TeacherCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a teacher."""
    try:
        return await teacher_service.create_teacher(db, teacher_data)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get(
    "/{teacher_id}/classes",
    response_model=list[TeacherClassResponse],
    dependencies=[Depends(require_feature(Feature.TEACHERS))],
)
async def list_teacher_classes(
    teacher_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """List the classes assigned to a teacher."""
    await _get_teacher_or_404(db, teacher_id)
    return await teacher_service.get_teacher_classes(db, teacher_id)


@router.post(
    "/{teacher_id}/classes",
    response_model=TeacherClassResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(*SCHOOL_MANAGERS))],
)
async def assign_class(
    teacher_id: UUID,
    assign_data: TeacherClassAssign,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Assign a class to a teacher."""
    await _get_teacher_or_404(db, teacher_id)
    if not await school_class_service.get_school_class_by_id(db, assign_data.class_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Class not found",
        )

    try:
        return await teacher_service.assign_class(db, teacher_id, assign_data.class_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete(
    "/{teacher_id}/classes/{class_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_roles(*SCHOOL_MANAGERS))],
)
async def unassign_class(
    teacher_id: UUID,
    class_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """Remove a class from a teacher."""
    try:
        await teacher_service.unassign_class(db, teacher_id, class_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
