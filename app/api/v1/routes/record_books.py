"""Record book routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.deps import require_feature
from app.core.permissions import Feature
from app.models.record_book import RecordBook
from app.schemas.record_book import RecordBookResponse, RecordBookUpsert
from app.services import record_book as record_book_service

router = APIRouter(
    prefix="/record-books",
    tags=["Record Book"],
    dependencies=[Depends(require_feature(Feature.RECORD_BOOK))],
)


def _build_record_book_response(record_book: RecordBook) -> RecordBookResponse:
    return RecordBookResponse(
        id=record_book.id,
        student_id=record_book.student_id,
        teacher_id=record_book.teacher_id,
        class_id=record_book.class_id,
        subject_id=record_book.subject_id,
        term=record_book.term,
        year=record_book.year,
        tests=record_book_service.get_test_marks(record_book),
        created_at=record_book.created_at,
        updated_at=record_book.updated_at,
    )


@router.get("", response_model=list[RecordBookResponse])
async def list_record_books(
    db: Annotated[AsyncSession, Depends(get_db)],
    class_id: UUID | None = None,
    subject_id: UUID | None = None,
    term: str | None = None,
    year: str | None = None,
    teacher_id: UUID | None = None,
) -> list[RecordBookResponse]:
    """List record book rows filtered by class, subject, term and year."""
    record_books = await record_book_service.get_record_books(
        db,
        class_id=class_id,
        subject_id=subject_id,
        term=term,
        year=year,
        teacher_id=teacher_id,
    )
    return [_build_record_book_response(rb) for rb in record_books]


@router.put("", response_model=RecordBookResponse)
async def upsert_record_book(
    record_book_data: RecordBookUpsert,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> RecordBookResponse:
    """Create or update marks for one student, subject and term."""
    record_book = await record_book_service.upsert_record_book(db, record_book_data)
    return _build_record_book_response(record_book)
