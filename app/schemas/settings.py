"""Settings schemas."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.core.permissions import validate_module_access


class SettingsUpdate(BaseModel):
    """Schema for updating school settings."""

    school_name: str | None = Field(None, alias="schoolName", max_length=255)
    school_motto: str | None = Field(None, alias="schoolMotto", max_length=500)
    school_address: str | None = Field(None, alias="schoolAddress")
    school_phone: str | None = Field(None, alias="schoolPhone", max_length=50)
    school_email: str | None = Field(None, alias="schoolEmail", max_length=255)
    headmaster_name: str | None = Field(None, alias="headmasterName", max_length=255)
    academic_year: str | None = Field(None, alias="academicYear", max_length=50)
    active_term: str | None = Field(None, alias="activeTerm", max_length=50)
    term_start_date: date | None = Field(None, alias="termStartDate")
    term_end_date: date | None = Field(None, alias="termEndDate")
    currency_symbol: str | None = Field(None, alias="currencySymbol", max_length=10)
    student_id_prefix: str | None = Field(None, alias="studentIdPrefix", max_length=20)

    model_config = {"populate_by_name": True, "str_strip_whitespace": True}


class ModuleAccessUpdate(BaseModel):
    """A complete module access document: role -> feature -> allowed."""

    module_access: dict[str, Any] = Field(..., alias="moduleAccess")

    model_config = {"populate_by_name": True}

    @field_validator("module_access")
    @classmethod
    def check_keys(cls, value: dict[str, Any]) -> dict[str, dict[str, bool]]:
        return validate_module_access(value)


class ModuleAccessResponse(BaseModel):
    module_access: dict[str, dict[str, bool]]


class SettingsResponse(BaseModel):
    """Settings response schema."""

    id: UUID
    school_name: str | None
    school_motto: str | None
    school_address: str | None
    school_phone: str | None
    school_email: str | None
    headmaster_name: str | None
    academic_year: str | None
    active_term: str | None
    term_start_date: date | None
    term_end_date: date | None
    currency_symbol: str
    student_id_prefix: str
    module_access: dict[str, dict[str, bool]] | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
