"""Student schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.validators import OptionalPhoneNumber


class StudentCreate(BaseModel):
    """Schema for creating a new student."""

    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    student_number: str = Field(..., min_length=1, max_length=50)
    date_of_birth: date
    gender: str = Field(..., min_length=1, max_length=20)
    address: str | None = Field(None, max_length=255)
    contact_number: OptionalPhoneNumber = None
    student_type: str = Field("Day Scholar", max_length=20)
    class_id: UUID | None = None

    model_config = {"str_strip_whitespace": True}


class StudentResponse(BaseModel):
    """Student response schema."""

    id: UUID
    first_name: str
    last_name: str
    student_number: str
    date_of_birth: date
    gender: str
    address: str | None
    contact_number: str | None
    student_type: str
    enrollment_date: datetime
    is_active: bool
    class_id: UUID | None

    model_config = {"from_attributes": True}
