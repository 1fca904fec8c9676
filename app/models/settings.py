"""Settings model."""

from datetime import date
from typing import Any

from sqlalchemy import JSON, Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import BaseModel, TimestampMixin


class Settings(TimestampMixin, BaseModel):
    """School-wide configuration. Exactly one row is expected."""

    __tablename__ = "settings"

    student_id_prefix: Mapped[str] = mapped_column(
        "studentIdPrefix",
        String(20),
        default="JPS",
        nullable=False,
    )
    currency_symbol: Mapped[str] = mapped_column(
        "currencySymbol",
        String(10),
        default="KES",
        nullable=False,
    )
    school_name: Mapped[str | None] = mapped_column("schoolName", Text)
    school_motto: Mapped[str | None] = mapped_column("schoolMotto", Text)
    school_address: Mapped[str | None] = mapped_column("schoolAddress", Text)
    school_phone: Mapped[str | None] = mapped_column("schoolPhone", String(50))
    school_email: Mapped[str | None] = mapped_column("schoolEmail", String(255))
    headmaster_name: Mapped[str | None] = mapped_column("headmasterName", String(255))
    academic_year: Mapped[str | None] = mapped_column("academicYear", String(50))
    active_term: Mapped[str | None] = mapped_column("activeTerm", String(50))
    term_start_date: Mapped[date | None] = mapped_column("termStartDate", Date)
    term_end_date: Mapped[date | None] = mapped_column("termEndDate", Date)

    # role -> feature -> bool; see app.core.permissions
    module_access: Mapped[dict[str, Any] | None] = mapped_column(
        "moduleAccess",
        JSON(none_as_null=True),
        nullable=True,
    )
