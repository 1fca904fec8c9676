"""Timetable schemas."""

import re
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.models.timetable import DEFAULT_DAYS

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _check_time(value: str | None) -> str | None:
    if value is not None and not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM format")
    return value


class BreakPeriod(BaseModel):
    after_period: int = Field(..., alias="afterPeriod", ge=1)
    duration_minutes: int = Field(..., alias="durationMinutes", ge=1)
    name: str = "Break"

    model_config = {"populate_by_name": True}


class TimetableConfigUpdate(BaseModel):
    """Schema for saving the timetable configuration."""

    periods_per_day: int | None = Field(None, ge=1, le=20)
    school_start_time: str | None = None
    school_end_time: str | None = None
    period_duration_minutes: int | None = Field(None, ge=1, le=240)
    break_periods: list[BreakPeriod] | None = None
    lessons_per_week: dict[str, int] | None = None
    days_of_week: list[str] | None = None
    additional_preferences: dict[str, Any] | None = None

    @field_validator("school_start_time", "school_end_time")
    @classmethod
    def check_time(cls, value: str | None) -> str | None:
        return _check_time(value)

    @field_validator("days_of_week")
    @classmethod
    def check_days(cls, value: list[str] | None) -> list[str] | None:
        if value is not None and not value:
            raise ValueError("At least one day is required")
        return value


class TimetableConfigResponse(BaseModel):
    """Timetable configuration response schema."""

    id: UUID
    periods_per_day: int
    school_start_time: str
    school_end_time: str
    period_duration_minutes: int
    break_periods: list[dict[str, Any]] | None
    lessons_per_week: dict[str, int] | None
    days_of_week: list[str] = Field(default_factory=lambda: list(DEFAULT_DAYS))
    additional_preferences: dict[str, Any] | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("days_of_week", mode="before")
    @classmethod
    def default_days(cls, value: list[str] | None) -> list[str]:
        return value or list(DEFAULT_DAYS)


class TimetableVersionCreate(BaseModel):
    """Schema for creating a timetable version."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    config_id: UUID | None = None

    model_config = {"str_strip_whitespace": True}


class TimetableVersionResponse(BaseModel):
    """Timetable version response schema."""

    id: UUID
    name: str
    description: str | None
    config_id: UUID | None
    is_active: bool
    is_published: bool
    created_by: UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TimetableSlotCreate(BaseModel):
    """Schema for placing a lesson in a timetable version."""

    teacher_id: UUID
    class_id: UUID
    subject_id: UUID
    day_of_week: str = Field(..., min_length=1, max_length=20)
    period_number: int = Field(..., ge=1)
    start_time: str | None = None
    end_time: str | None = None
    room: str | None = Field(None, max_length=100)
    is_break: bool = False

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, value: str | None) -> str | None:
        return _check_time(value)


class TimetableSlotUpdate(BaseModel):
    """Schema for manually editing a slot."""

    teacher_id: UUID | None = None
    class_id: UUID | None = None
    subject_id: UUID | None = None
    day_of_week: str | None = Field(None, min_length=1, max_length=20)
    period_number: int | None = Field(None, ge=1)
    start_time: str | None = None
    end_time: str | None = None
    room: str | None = Field(None, max_length=100)

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, value: str | None) -> str | None:
        return _check_time(value)


class TimetableSlotResponse(BaseModel):
    """Timetable slot response schema."""

    id: UUID
    version_id: UUID
    teacher_id: UUID
    class_id: UUID
    subject_id: UUID
    day_of_week: str
    period_number: int
    start_time: str | None
    end_time: str | None
    room: str | None
    is_break: bool
    is_manually_edited: bool
    edited_at: datetime | None
    edited_by: UUID | None

    model_config = {"from_attributes": True}
