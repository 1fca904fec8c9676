"""Schemas for school classes."""

from uuid import UUID

from pydantic import BaseModel, Field


class SchoolClassCreate(BaseModel):
    """Schema for creating a new school class."""

    name: str = Field(..., min_length=1, max_length=255)
    form: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=255)

    model_config = {"str_strip_whitespace": True}


class SchoolClassUpdate(BaseModel):
    """Schema for updating a school class."""

    name: str | None = Field(None, min_length=1, max_length=255)
    form: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=255)
    is_active: bool | None = None

    model_config = {"str_strip_whitespace": True}


class SchoolClassResponse(BaseModel):
    """School class response schema."""

    id: UUID
    name: str
    form: str
    description: str | None
    is_active: bool

    model_config = {"from_attributes": True}
