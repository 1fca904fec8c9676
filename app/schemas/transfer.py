"""Student transfer and enrollment schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.models.transfer import TransferType


class TransferCreate(BaseModel):
    """
    Schema for initiating a transfer.

    Internal transfers need ``new_class_id``; external transfers need
    ``destination_school``.
    """

    student_id: UUID
    transfer_type: TransferType
    new_class_id: UUID | None = None
    destination_school: str | None = Field(None, max_length=255)
    reason: str | None = None
    effective_date: date | None = None
    notes: str | None = None

    model_config = {"str_strip_whitespace": True}

    @model_validator(mode="after")
    def check_transfer_target(self) -> "TransferCreate":
        if self.transfer_type == TransferType.INTERNAL and self.new_class_id is None:
            raise ValueError("New class ID is required for internal transfer")
        if self.transfer_type == TransferType.EXTERNAL and not self.destination_school:
            raise ValueError("Destination school name is required for external transfer")
        return self


class TransferResponse(BaseModel):
    """Student transfer response schema."""

    id: UUID
    student_id: UUID
    transfer_type: TransferType
    previous_class_id: UUID | None
    new_class_id: UUID | None
    destination_school: str | None
    reason: str | None
    transfer_date: date
    effective_date: date | None
    processed_by_user_id: UUID
    notes: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class EnrollmentCreate(BaseModel):
    """Schema for enrolling a student in a class."""

    student_id: UUID
    class_id: UUID
    enrollment_date: date | None = None
    notes: str | None = None


class EnrollmentResponse(BaseModel):
    """Student enrollment response schema."""

    id: UUID
    student_id: UUID
    class_id: UUID
    enrollment_date: date
    withdrawal_date: date | None
    is_active: bool
    enrolled_by_user_id: UUID
    withdrawn_by_user_id: UUID | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
