"""Teacher-class assignment model."""

from uuid import UUID

from sqlalchemy import ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import BaseModel


class TeacherClass(BaseModel):
    """Junction row: a teacher teaches a class. Each pair appears once."""

    __tablename__ = "teacher_classes"
    __table_args__ = (
        UniqueConstraint("teacherId", "classId", name="UQ_teacher_classes_teacher_class"),
    )

    teacher_id: Mapped[UUID] = mapped_column(
        "teacherId",
        Uuid,
        ForeignKey("teachers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    class_id: Mapped[UUID] = mapped_column(
        "classId",
        Uuid,
        ForeignKey("classes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
