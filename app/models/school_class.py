"""SchoolClass model."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import BaseModel


class SchoolClass(BaseModel):
    """A class (form/stream) students belong to."""

    __tablename__ = "classes"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    form: Mapped[str] = mapped_column(String(255), nullable=False)  # e.g. "Form 1"
    description: Mapped[str | None] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column("isActive", Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<SchoolClass(id={self.id}, name={self.name})>"
