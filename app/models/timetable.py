"""Timetable models."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import BaseModel, TimestampMixin

DEFAULT_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]


class TimetableConfig(TimestampMixin, BaseModel):
    """Scheduling parameters shared by timetable versions."""

    __tablename__ = "timetable_configs"

    periods_per_day: Mapped[int] = mapped_column("periodsPerDay", Integer, default=8, nullable=False)
    school_start_time: Mapped[str] = mapped_column(
        "schoolStartTime", String(5), default="08:00", nullable=False
    )
    school_end_time: Mapped[str] = mapped_column(
        "schoolEndTime", String(5), default="16:00", nullable=False
    )
    period_duration_minutes: Mapped[int] = mapped_column(
        "periodDurationMinutes", Integer, default=40, nullable=False
    )
    # [{"afterPeriod": 3, "durationMinutes": 20, "name": "Break"}]
    break_periods: Mapped[list[Any] | None] = mapped_column("breakPeriods", JSON(none_as_null=True))
    # subject id -> lessons per week
    lessons_per_week: Mapped[dict[str, int] | None] = mapped_column(
        "lessonsPerWeek", JSON(none_as_null=True)
    )
    days_of_week: Mapped[list[str] | None] = mapped_column("daysOfWeek", JSON(none_as_null=True))
    additional_preferences: Mapped[dict[str, Any] | None] = mapped_column(
        "additionalPreferences", JSON(none_as_null=True)
    )
    is_active: Mapped[bool] = mapped_column("isActive", Boolean, default=True, nullable=False)


class TimetableVersion(TimestampMixin, BaseModel):
    """A named timetable snapshot. At most one is active and one published."""

    __tablename__ = "timetable_versions"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    config_id: Mapped[UUID | None] = mapped_column("configId", Uuid)
    is_active: Mapped[bool] = mapped_column("isActive", Boolean, default=False, nullable=False)
    is_published: Mapped[bool] = mapped_column(
        "isPublished", Boolean, default=False, nullable=False
    )
    created_by: Mapped[UUID | None] = mapped_column("createdBy", Uuid)


class TimetableSlot(BaseModel):
    """One lesson in a day/period cell of a timetable version."""

    __tablename__ = "timetable_slots"
    __table_args__ = (
        UniqueConstraint(
            "versionId",
            "teacherId",
            "dayOfWeek",
            "periodNumber",
            name="UQ_timetable_slots_teacher_day_period",
        ),
        UniqueConstraint(
            "versionId",
            "classId",
            "dayOfWeek",
            "periodNumber",
            name="UQ_timetable_slots_class_day_period",
        ),
    )

    version_id: Mapped[UUID] = mapped_column(
        "versionId",
        Uuid,
        ForeignKey("timetable_versions.id", ondelete="CASCADE"),
        nullable=False,
    )
    teacher_id: Mapped[UUID] = mapped_column(
        "teacherId", Uuid, ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False
    )
    class_id: Mapped[UUID] = mapped_column(
        "classId", Uuid, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False
    )
    subject_id: Mapped[UUID] = mapped_column(
        "subjectId", Uuid, ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False
    )
    day_of_week: Mapped[str] = mapped_column("dayOfWeek", String(20), nullable=False)
    period_number: Mapped[int] = mapped_column("periodNumber", Integer, nullable=False)
    start_time: Mapped[str | None] = mapped_column("startTime", String(5))
    end_time: Mapped[str | None] = mapped_column("endTime", String(5))
    room: Mapped[str | None] = mapped_column(String(100))
    is_break: Mapped[bool] = mapped_column("isBreak", Boolean, default=False, nullable=False)
    is_manually_edited: Mapped[bool] = mapped_column(
        "isManuallyEdited", Boolean, default=False, nullable=False
    )
    edited_at: Mapped[datetime | None] = mapped_column("editedAt", DateTime)
    edited_by: Mapped[UUID | None] = mapped_column("editedBy", Uuid)
