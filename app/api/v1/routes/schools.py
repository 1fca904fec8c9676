"""School routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import CurrentUser, require_roles
from app.core.exceptions import ServiceError
from app.core.permissions import SCHOOL_MANAGERS
from app.models.user import User
from app.schemas.school import (
    SchoolCodeResponse,
    SchoolCreate,
    SchoolResponse,
    SchoolUpdate,
)
from app.services import school as school_service

router = APIRouter(prefix="/schools", tags=["Schools"])


# ============== Endpoints ==============


@router.get("", response_model=list[SchoolResponse])
async def list_schools(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: CurrentUser,
) -> list[SchoolResponse]:
    """List schools ordered by name."""
    schools = await school_service.get_schools(db)
    return [SchoolResponse.model_validate(s) for s in schools]


@router.get("/profile", response_model=SchoolResponse)
async def get_school_profile(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: CurrentUser,
) -> SchoolResponse:
    """Get the school profile of this installation."""
    school = await school_service.get_school_profile(db)

    if not school:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="School profile not found",
        )

    return SchoolResponse.model_validate(school)


@router.post("/generate-code", response_model=SchoolCodeResponse)
async def generate_school_code(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_roles(*SCHOOL_MANAGERS))],
) -> SchoolCodeResponse:
    """
    Generate an unused school code.

    - Demo accounts cannot generate codes
    """
    if current_user.is_demo:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Demo accounts cannot generate school codes",
        )

    try:
        code = await school_service.generate_school_code(db)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return SchoolCodeResponse(code=code)


@router.post(
    "",
    response_model=SchoolResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(*SCHOOL_MANAGERS))],
)
async def create_school(
    school_data: SchoolCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SchoolResponse:
    """
    Create a new school.

    - Only SUPERADMIN and ADMIN can create schools
    """
    try:
        school = await school_service.create_school(db, school_data)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return SchoolResponse.model_validate(school)


@router.get("/{school_id}", response_model=SchoolResponse)
async def get_school(
    school_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: CurrentUser,
) -> SchoolResponse:
    """Get a specific school by ID."""
    school = await school_service.get_school_by_id(db, school_id)

    if not school:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="School not found",
        )

    return SchoolResponse.model_validate(school)


@router.patch(
    "/{school_id}",
    response_model=SchoolResponse,
    dependencies=[Depends(require_roles(*SCHOOL_MANAGERS))],
)
async def update_school(
    school_id: UUID,
    school_data: SchoolUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SchoolResponse:
    """
    Update a school.

    - Only SUPERADMIN and ADMIN can update schools
    """
    school = await school_service.get_school_by_id(db, school_id)

    if not school:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="School not found",
        )

    try:
        updated_school = await school_service.update_school(db, school, school_data)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return SchoolResponse.model_validate(updated_school)
