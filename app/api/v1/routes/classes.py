"""School classes API routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import require_feature, require_roles
from app.core.exceptions import ServiceError
from app.core.permissions import SCHOOL_MANAGERS, Feature
from app.schemas.school_class import (
    SchoolClassCreate,
    SchoolClassResponse,
    SchoolClassUpdate,
)
from app.services import school_class as school_class_service

router = APIRouter(prefix="/classes", tags=["Classes"])


@router.get(
    "",
    response_model=list[SchoolClassResponse],
    dependencies=[Depends(require_feature(Feature.CLASSES))],
)
async def list_classes(
    db: Annotated[AsyncSession, Depends(get_db)],
    is_active: bool | None = None,
):
    """List all school classes."""
    return await school_class_service.get_school_classes(db, is_active=is_active)


@router.post(
    "",
    response_model=SchoolClassResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(*SCHOOL_MANAGERS))],
)
async def create_class(
    class_data: SchoolClassCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a new school class."""
    try:
        return await school_class_service.create_school_class(db, class_data)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get(
    "/{class_id}",
    response_model=SchoolClassResponse,
    dependencies=[Depends(require_feature(Feature.CLASSES))],
)
async def get_class(
    class_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get a school class by ID."""
    school_class = await school_class_service.get_school_class_by_id(db, class_id)
    if not school_class:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Class not found",
        )
    return school_class


@router.patch(
    "/{class_id}",
    response_model=SchoolClassResponse,
    dependencies=[Depends(require_roles(*SCHOOL_MANAGERS))],
)
async def update_class(
    class_id: UUID,
    class_data: SchoolClassUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Update a school class."""
    school_class = await school_class_service.get_school_class_by_id(db, class_id)
    if not school_class:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Class not found",
        )
    try:
        return await school_class_service.update_school_class(db, school_class, class_data)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
