"""Tests for students API."""

from uuid import uuid4

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import auth_header, make_class, make_student


def student_payload(**overrides) -> dict:
    payload = {
        "first_name": "Rudo",
        "last_name": "Moyo",
        "student_number": "JPS001",
        "date_of_birth": "2015-05-17",
        "gender": "Female",
    }
    payload.update(overrides)
    return payload


class TestCreateStudent:
    """Tests for creating students."""

    async def test_create_student(self, client: AsyncClient, admin_token: str):
        response = await client.post(
            "/api/v1/students",
            headers=auth_header(admin_token),
            json=student_payload(contact_number="+263771234567"),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["student_number"] == "JPS001"
        assert data["student_type"] == "Day Scholar"
        assert data["class_id"] is None
        assert data["is_active"] is True

    async def test_create_in_class_opens_enrollment(
        self, client: AsyncClient, db: AsyncSession, admin_token: str
    ):
        """Test a student placed in a class gets an active enrollment."""
        school_class = await make_class(db)

        response = await client.post(
            "/api/v1/students",
            headers=auth_header(admin_token),
            json=student_payload(class_id=str(school_class.id)),
        )
        assert response.status_code == 201
        student_id = response.json()["id"]

        enrollments = await client.get(
            f"/api/v1/students/{student_id}/enrollments", headers=auth_header(admin_token)
        )
        assert enrollments.status_code == 200
        data = enrollments.json()
        assert len(data) == 1
        assert data[0]["class_id"] == str(school_class.id)
        assert data[0]["is_active"] is True

    async def test_duplicate_student_number(
        self, client: AsyncClient, db: AsyncSession, admin_token: str
    ):
        await make_student(db, "JPS001")

        response = await client.post(
            "/api/v1/students", headers=auth_header(admin_token), json=student_payload()
        )

        assert response.status_code == 409

    async def test_invalid_contact_number(self, client: AsyncClient, admin_token: str):
        response = await client.post(
            "/api/v1/students",
            headers=auth_header(admin_token),
            json=student_payload(contact_number="077 123"),
        )

        assert response.status_code == 422

    async def test_teacher_cannot_create(self, client: AsyncClient, teacher_token: str):
        response = await client.post(
            "/api/v1/students", headers=auth_header(teacher_token), json=student_payload()
        )

        assert response.status_code == 403


class TestListStudents:
    """Tests for reading students."""

    async def test_filter_by_class(self, client: AsyncClient, db: AsyncSession, teacher_token: str):
        class_a = await make_class(db, "Stage 1A", "Stage 1")
        class_b = await make_class(db, "Stage 1B", "Stage 1")
        in_a = await make_student(db, "JPS001", class_a.id)
        await make_student(db, "JPS002", class_b.id)

        response = await client.get(
            "/api/v1/students",
            headers=auth_header(teacher_token),
            params={"class_id": str(class_a.id)},
        )

        assert response.status_code == 200
        assert [s["id"] for s in response.json()] == [str(in_a.id)]

    async def test_get_student(self, client: AsyncClient, db: AsyncSession, teacher_token: str):
        student = await make_student(db)

        response = await client.get(
            f"/api/v1/students/{student.id}", headers=auth_header(teacher_token)
        )

        assert response.status_code == 200
        assert response.json()["first_name"] == "Rudo"

    async def test_get_student_not_found(self, client: AsyncClient, admin_token: str):
        response = await client.get(
            f"/api/v1/students/{uuid4()}", headers=auth_header(admin_token)
        )

        assert response.status_code == 404

    async def test_history_requires_manager(
        self, client: AsyncClient, db: AsyncSession, teacher_token: str
    ):
        student = await make_student(db)

        response = await client.get(
            f"/api/v1/students/{student.id}/transfers", headers=auth_header(teacher_token)
        )

        assert response.status_code == 403
