"""Record book service."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.record_book import MAX_TESTS, RecordBook
from app.schemas.record_book import MarkEntry, RecordBookUpsert


def get_test_marks(record_book: RecordBook) -> list[MarkEntry]:
    """Tests that hold a score, topic or date, in number order."""
    marks = []
    for number in range(1, MAX_TESTS + 1):
        score = getattr(record_book, f"test{number}")
        topic = getattr(record_book, f"test{number}_topic")
        test_date = getattr(record_book, f"test{number}_date")
        if score is None and topic is None and test_date is None:
            continue
        marks.append(MarkEntry(number=number, score=score, topic=topic, test_date=test_date))
    return marks


async def get_record_books(
    db: AsyncSession,
    class_id: UUID | None = None,
    subject_id: UUID | None = None,
    term: str | None = None,
    year: str | None = None,
    teacher_id: UUID | None = None,
) -> list[RecordBook]:
    """Get record book rows with optional filters."""
    query = select(RecordBook)

    if class_id is not None:
        query = query.where(RecordBook.class_id == class_id)
    if subject_id is not None:
        query = query.where(RecordBook.subject_id == subject_id)
    if term is not None:
        query = query.where(RecordBook.term == term)
    if year is not None:
        query = query.where(RecordBook.year == year)
    if teacher_id is not None:
        query = query.where(RecordBook.teacher_id == teacher_id)

    result = await db.execute(query.order_by(RecordBook.created_at))
    return list(result.scalars().all())


async def upsert_record_book(db: AsyncSession, data: RecordBookUpsert) -> RecordBook:
    """
    Create or update the row keyed by student, teacher, class, subject,
    term and year. Only the tests listed in ``data`` are overwritten.
    """
    result = await db.execute(
        select(RecordBook).where(
            RecordBook.student_id == data.student_id,
            RecordBook.teacher_id == data.teacher_id,
            RecordBook.class_id == data.class_id,
            RecordBook.subject_id == data.subject_id,
            RecordBook.term == data.term,
            RecordBook.year == data.year,
        )
    )
    record_book = result.scalar_one_or_none()

    if record_book is None:
        record_book = RecordBook(
            student_id=data.student_id,
            teacher_id=data.teacher_id,
            class_id=data.class_id,
            subject_id=data.subject_id,
            term=data.term,
            year=data.year,
        )
        db.add(record_book)

    for mark in data.tests:
        setattr(record_book, f"test{mark.number}", mark.score)
        setattr(record_book, f"test{mark.number}_topic", mark.topic)
        setattr(record_book, f"test{mark.number}_date", mark.test_date)

    await db.commit()
    await db.refresh(record_book)
    return record_book
