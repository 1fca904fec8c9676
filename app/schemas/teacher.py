"""Teacher and teacher-class assignment schemas."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.validators import OptionalPhoneNumber


class TeacherCreate(BaseModel):
    """Schema for creating a teacher."""

    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    teacher_id: str = Field(..., min_length=1, max_length=255)
    phone_number: OptionalPhoneNumber = None
    address: str | None = Field(None, max_length=255)
    date_of_birth: date | None = None

    model_config = {"str_strip_whitespace": True}


class TeacherResponse(BaseModel):
    """Teacher response schema."""

    id: UUID
    first_name: str
    last_name: str
    teacher_id: str
    phone_number: str | None
    address: str | None
    date_of_birth: date | None
    is_active: bool
    user_id: UUID | None

    model_config = {"from_attributes": True}


class TeacherClassAssign(BaseModel):
    """Assign a class to a teacher."""

    class_id: UUID


class TeacherClassResponse(BaseModel):
    """One teacher-class assignment."""

    id: UUID
    teacher_id: UUID
    class_id: UUID

    model_config = {"from_attributes": True}
