"""Tests for record book API."""

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import auth_header, make_class, make_student, make_subject, make_teacher


@pytest_asyncio.fixture
async def record_book_keys(db: AsyncSession) -> dict:
    school_class = await make_class(db)
    student = await make_student(db, class_id=school_class.id)
    teacher = await make_teacher(db)
    subject = await make_subject(db)
    return {
        "student_id": str(student.id),
        "teacher_id": str(teacher.id),
        "class_id": str(school_class.id),
        "subject_id": str(subject.id),
        "term": "Term 1",
        "year": "2025",
    }


class TestUpsertRecordBook:
    """Tests for entering marks."""

    async def test_create_row(
        self, client: AsyncClient, teacher_token: str, record_book_keys: dict
    ):
        response = await client.put(
            "/api/v1/record-books",
            headers=auth_header(teacher_token),
            json={
                **record_book_keys,
                "tests": [
                    {"number": 1, "score": 78, "topic": "Fractions", "test_date": "2025-02-03"},
                    {"number": 3, "score": 64},
                ],
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["subject_id"] == record_book_keys["subject_id"]
        assert data["tests"] == [
            {"number": 1, "score": 78, "topic": "Fractions", "test_date": "2025-02-03"},
            {"number": 3, "score": 64, "topic": None, "test_date": None},
        ]

    async def test_update_keeps_unlisted_tests(
        self, client: AsyncClient, teacher_token: str, record_book_keys: dict
    ):
        """Test a second save updates the same row and only the listed tests."""
        first = await client.put(
            "/api/v1/record-books",
            headers=auth_header(teacher_token),
            json={**record_book_keys, "tests": [{"number": 1, "score": 78}]},
        )
        second = await client.put(
            "/api/v1/record-books",
            headers=auth_header(teacher_token),
            json={**record_book_keys, "tests": [{"number": 2, "score": 90}]},
        )

        assert second.json()["id"] == first.json()["id"]
        assert [(t["number"], t["score"]) for t in second.json()["tests"]] == [(1, 78), (2, 90)]

    async def test_subjects_are_separate_rows(
        self, client: AsyncClient, db: AsyncSession, teacher_token: str, record_book_keys: dict
    ):
        science = await make_subject(db, "SCI")

        await client.put(
            "/api/v1/record-books",
            headers=auth_header(teacher_token),
            json={**record_book_keys, "tests": [{"number": 1, "score": 78}]},
        )
        await client.put(
            "/api/v1/record-books",
            headers=auth_header(teacher_token),
            json={**record_book_keys, "subject_id": str(science.id), "tests": [{"number": 1, "score": 55}]},
        )

        response = await client.get(
            "/api/v1/record-books",
            headers=auth_header(teacher_token),
            params={"class_id": record_book_keys["class_id"], "term": "Term 1", "year": "2025"},
        )
        assert len(response.json()) == 2

        filtered = await client.get(
            "/api/v1/record-books",
            headers=auth_header(teacher_token),
            params={"subject_id": str(science.id)},
        )
        assert [rb["tests"][0]["score"] for rb in filtered.json()] == [55]

    @pytest.mark.parametrize(
        "tests",
        [
            [{"number": 1, "score": 101}],
            [{"number": 1, "score": -1}],
            [{"number": 11, "score": 50}],
            [{"number": 1, "score": 50}, {"number": 1, "score": 60}],
            [{"number": 1, "topic": "x" * 101}],
        ],
    )
    async def test_invalid_marks(
        self, client: AsyncClient, teacher_token: str, record_book_keys: dict, tests: list
    ):
        response = await client.put(
            "/api/v1/record-books",
            headers=auth_header(teacher_token),
            json={**record_book_keys, "tests": tests},
        )

        assert response.status_code == 422

    async def test_subject_required(
        self, client: AsyncClient, teacher_token: str, record_book_keys: dict
    ):
        keys = {k: v for k, v in record_book_keys.items() if k != "subject_id"}

        response = await client.put(
            "/api/v1/record-books", headers=auth_header(teacher_token), json=keys
        )

        assert response.status_code == 422


class TestRecordBookAccess:
    """Tests for record book module access."""

    async def test_admin_without_module(self, client: AsyncClient, admin_token: str):
        """Test the default admin access does not include the record book."""
        response = await client.get("/api/v1/record-books", headers=auth_header(admin_token))

        assert response.status_code == 403

    async def test_superadmin_always_allowed(self, client: AsyncClient, superadmin_token: str):
        response = await client.get("/api/v1/record-books", headers=auth_header(superadmin_token))

        assert response.status_code == 200
        assert response.json() == []
