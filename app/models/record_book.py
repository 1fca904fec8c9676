"""Record book model."""

from datetime import date
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import BaseModel, TimestampMixin

MAX_TESTS = 10


class RecordBook(TimestampMixin, BaseModel):
    """A teacher's running marks for one student in one subject and term.

    Holds up to ten numbered tests, each an integer score with an optional
    topic and date.
    """

    __tablename__ = "record_books"
    __table_args__ = (
        UniqueConstraint(
            "studentId",
            "teacherId",
            "classId",
            "subjectId",
            "term",
            "year",
            name="IDX_record_books_studentId_teacherId_classId_subjectId_term_year",
        ),
    )

    student_id: Mapped[UUID] = mapped_column(
        "studentId", Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False
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
    term: Mapped[str] = mapped_column(String(50), nullable=False)
    year: Mapped[str] = mapped_column(String(10), nullable=False)

    test1: Mapped[int | None] = mapped_column(Integer)
    test1_topic: Mapped[str | None] = mapped_column("test1Topic", String(100))
    test1_date: Mapped[date | None] = mapped_column("test1Date", Date)
    test2: Mapped[int | None] = mapped_column(Integer)
    test2_topic: Mapped[str | None] = mapped_column("test2Topic", String(100))
    test2_date: Mapped[date | None] = mapped_column("test2Date", Date)
    test3: Mapped[int | None] = mapped_column(Integer)
    test3_topic: Mapped[str | None] = mapped_column("test3Topic", String(100))
    test3_date: Mapped[date | None] = mapped_column("test3Date", Date)
    test4: Mapped[int | None] = mapped_column(Integer)
    test4_topic: Mapped[str | None] = mapped_column("test4Topic", String(100))
    test4_date: Mapped[date | None] = mapped_column("test4Date", Date)
    test5: Mapped[int | None] = mapped_column(Integer)
    test5_topic: Mapped[str | None] = mapped_column("test5Topic", String(100))
    test5_date: Mapped[date | None] = mapped_column("test5Date", Date)
    test6: Mapped[int | None] = mapped_column(Integer)
    test6_topic: Mapped[str | None] = mapped_column("test6Topic", String(100))
    test6_date: Mapped[date | None] = mapped_column("test6Date", Date)
    test7: Mapped[int | None] = mapped_column(Integer)
    test7_topic: Mapped[str | None] = mapped_column("test7Topic", String(100))
    test7_date: Mapped[date | None] = mapped_column("test7Date", Date)
    test8: Mapped[int | None] = mapped_column(Integer)
    test8_topic: Mapped[str | None] = mapped_column("test8Topic", String(100))
    test8_date: Mapped[date | None] = mapped_column("test8Date", Date)
    test9: Mapped[int | None] = mapped_column(Integer)
    test9_topic: Mapped[str | None] = mapped_column("test9Topic", String(100))
    test9_date: Mapped[date | None] = mapped_column("test9Date", Date)
    test10: Mapped[int | None] = mapped_column(Integer)
    test10_topic: Mapped[str | None] = mapped_column("test10Topic", String(100))
    test10_date: Mapped[date | None] = mapped_column("test10Date", Date)
