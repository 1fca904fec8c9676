"""Teacher model."""

from datetime import date
from uuid import UUID

from sqlalchemy import Boolean, Date, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import BaseModel


class Teacher(BaseModel):
    """Teaching staff member, optionally linked to a login user."""

    __tablename__ = "teachers"

    first_name: Mapped[str] = mapped_column("firstName", String(255), nullable=False)
    last_name: Mapped[str] = mapped_column("lastName", String(255), nullable=False)
    # Staff number, formerly employeeNumber
    teacher_id: Mapped[str] = mapped_column("teacherId", String(255), nullable=False, unique=True)
    phone_number: Mapped[str | None] = mapped_column("phoneNumber", String(50))
    address: Mapped[str | None] = mapped_column(String(255))
    date_of_birth: Mapped[date | None] = mapped_column("dateOfBirth", Date)
    is_active: Mapped[bool] = mapped_column("isActive", Boolean, default=True, nullable=False)
    user_id: Mapped[UUID | None] = mapped_column("userId", Uuid, nullable=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Teacher(id={self.id}, teacher_id={self.teacher_id})>"
