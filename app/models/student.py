"""Student model."""

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import BaseModel


class Student(BaseModel):
    """Student model."""

    __tablename__ = "students"

    first_name: Mapped[str] = mapped_column("firstName", String(255), nullable=False)
    last_name: Mapped[str] = mapped_column("lastName", String(255), nullable=False)
    student_number: Mapped[str] = mapped_column(
        "studentNumber",
        String(50),
        nullable=False,
        unique=True,
    )
    date_of_birth: Mapped[date] = mapped_column("dateOfBirth", Date, nullable=False)
    gender: Mapped[str] = mapped_column(String(20), nullable=False)
    address: Mapped[str | None] = mapped_column(String(255))
    contact_number: Mapped[str | None] = mapped_column("contactNumber", String(50))
    student_type: Mapped[str] = mapped_column(
        "studentType",
        String(20),
        default="Day Scholar",
        nullable=False,
    )
    enrollment_date: Mapped[datetime] = mapped_column(
        "enrollmentDate",
        DateTime,
        server_default=func.now(),
        default=func.now(),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column("isActive", Boolean, default=True, nullable=False)
    class_id: Mapped[UUID | None] = mapped_column(
        "classId",
        Uuid,
        ForeignKey("classes.id", ondelete="SET NULL"),
        nullable=True,
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, name={self.full_name})>"

