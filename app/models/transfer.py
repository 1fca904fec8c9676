"""Student transfer and enrollment history models."""

import enum
from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Boolean, Date, DateTime, Enum, ForeignKey, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import BaseModel, TimestampMixin


class TransferType(str, enum.Enum):
    """Kind of student transfer."""

    INTERNAL = "internal"  # Moved to another class in this school
    EXTERNAL = "external"  # Left for another institution


class StudentTransfer(BaseModel):
    """Append-only record of a student transfer."""

    __tablename__ = "student_transfers"

    student_id: Mapped[UUID] = mapped_column(
        "studentId", Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False
    )
    transfer_type: Mapped[TransferType] = mapped_column(
        "transferType",
        Enum(
            TransferType,
            name="student_transfers_transfertype_enum",
            values_callable=lambda e: [m.value for m in e],
        ),
        default=TransferType.INTERNAL,
        nullable=False,
    )
    previous_class_id: Mapped[UUID | None] = mapped_column(
        "previousClassId", Uuid, ForeignKey("classes.id", ondelete="SET NULL")
    )
    new_class_id: Mapped[UUID | None] = mapped_column(
        "newClassId", Uuid, ForeignKey("classes.id", ondelete="SET NULL")
    )
    destination_school: Mapped[str | None] = mapped_column("destinationSchool", String(255))
    reason: Mapped[str | None] = mapped_column(Text)
    transfer_date: Mapped[date] = mapped_column("transferDate", Date, nullable=False)
    effective_date: Mapped[date | None] = mapped_column("effectiveDate", Date)
    processed_by_user_id: Mapped[UUID] = mapped_column(
        "processedByUserId", Uuid, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        "createdAt",
        DateTime,
        server_default=func.now(),
        default=func.now(),
        nullable=False,
    )


class StudentEnrollment(TimestampMixin, BaseModel):
    """One period of a student's membership in a class."""

    __tablename__ = "student_enrollments"

    student_id: Mapped[UUID] = mapped_column(
        "studentId", Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False
    )
    class_id: Mapped[UUID] = mapped_column(
        "classId", Uuid, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False
    )
    enrollment_date: Mapped[date] = mapped_column("enrollmentDate", Date, nullable=False)
    withdrawal_date: Mapped[date | None] = mapped_column("withdrawalDate", Date)
    is_active: Mapped[bool] = mapped_column("isActive", Boolean, default=True, nullable=False)
    enrolled_by_user_id: Mapped[UUID] = mapped_column(
        "enrolledByUserId", Uuid, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    withdrawn_by_user_id: Mapped[UUID | None] = mapped_column(
        "withdrawnByUserId", Uuid, ForeignKey("users.id", ondelete="SET NULL")
    )
    notes: Mapped[str | None] = mapped_column(Text)
