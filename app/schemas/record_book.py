"""Record book schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.models.record_book import MAX_TESTS


class MarkEntry(BaseModel):
    """Score, topic and date of one numbered test in a record book."""

    number: int = Field(..., ge=1, le=MAX_TESTS)
    score: int | None = Field(None, ge=0, le=100)
    topic: str | None = Field(None, max_length=100)
    test_date: date | None = None


class RecordBookUpsert(BaseModel):
    """Create or update the record book row for one student/subject/term."""

    student_id: UUID
    teacher_id: UUID
    class_id: UUID
    subject_id: UUID
    term: str = Field(..., min_length=1, max_length=50)
    year: str = Field(..., min_length=4, max_length=10)
    tests: list[MarkEntry] = Field(default_factory=list)

    model_config = {"str_strip_whitespace": True}

    @field_validator("tests")
    @classmethod
    def unique_test_numbers(cls, value: list[MarkEntry]) -> list[MarkEntry]:
        numbers = [t.number for t in value]
        if len(numbers) != len(set(numbers)):
            raise ValueError("Each test number may appear only once")
        return value


class RecordBookResponse(BaseModel):
    """Record book response schema."""

    id: UUID
    student_id: UUID
    teacher_id: UUID
    class_id: UUID
    subject_id: UUID
    term: str
    year: str
    tests: list[MarkEntry]
    created_at: datetime
    updated_at: datetime
