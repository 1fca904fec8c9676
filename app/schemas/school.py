"""School schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.schemas.validators import OptionalPhoneNumber


class SchoolCreate(BaseModel):
    """Schema for creating a new school."""

    name: str = Field(..., min_length=1, max_length=255)
    code: str = Field(..., min_length=1, max_length=64)
    logo_url: str | None = Field(None, alias="logoUrl")
    address: str | None = Field(None, max_length=255)
    phone: OptionalPhoneNumber = None
    subscription_end_date: datetime | None = Field(None, alias="subscriptionEndDate")

    model_config = {"populate_by_name": True, "str_strip_whitespace": True}

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        return value.lower()

    @field_validator("logo_url", "address")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        return value or None


class SchoolUpdate(BaseModel):
    """Schema for updating a school."""

    name: str | None = Field(None, min_length=1, max_length=255)
    code: str | None = Field(None, min_length=1, max_length=64)
    logo_url: str | None = Field(None, alias="logoUrl")
    address: str | None = Field(None, max_length=255)
    phone: OptionalPhoneNumber = None
    subscription_end_date: datetime | None = Field(None, alias="subscriptionEndDate")
    is_active: bool | None = Field(None, alias="isActive")

    model_config = {"populate_by_name": True, "str_strip_whitespace": True}

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str | None) -> str | None:
        return value.lower() if value is not None else None

    @field_validator("logo_url", "address")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        return value or None


class SchoolResponse(BaseModel):
    """School response schema."""

    id: UUID
    name: str
    code: str = Field(validation_alias="schoolid")
    logo_url: str | None
    address: str | None
    phone: str | None
    is_active: bool
    subscription_end_date: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SchoolCodeResponse(BaseModel):
    """A generated, currently unused school code."""

    code: str
