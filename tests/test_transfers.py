"""Tests for student transfers and enrollments."""

from datetime import date
from uuid import uuid4

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from tests.conftest import auth_header, make_class, make_student


async def _enroll(client: AsyncClient, token: str, student_id, class_id) -> dict:
    response = await client.post(
        "/api/v1/enrollments",
        headers=auth_header(token),
        json={"student_id": str(student_id), "class_id": str(class_id)},
    )
    assert response.status_code == 201
    return response.json()


class TestInternalTransfer:
    """Tests for moving a student between classes."""

    async def test_internal_transfer(
        self, client: AsyncClient, db: AsyncSession, admin_user: User, admin_token: str
    ):
        """Test the student moves and the enrollment history follows."""
        class_a = await make_class(db, "Stage 1A", "Stage 1")
        class_b = await make_class(db, "Stage 1B", "Stage 1")
        student = await make_student(db, class_id=class_a.id)
        await _enroll(client, admin_token, student.id, class_a.id)

        response = await client.post(
            "/api/v1/transfers",
            headers=auth_header(admin_token),
            json={
                "student_id": str(student.id),
                "transfer_type": "internal",
                "new_class_id": str(class_b.id),
                "reason": "Stream change",
                "effective_date": "2025-05-05",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["previous_class_id"] == str(class_a.id)
        assert data["new_class_id"] == str(class_b.id)
        assert data["destination_school"] is None
        assert data["transfer_date"] == date.today().isoformat()
        assert data["effective_date"] == "2025-05-05"
        assert data["processed_by_user_id"] == str(admin_user.id)

        student_response = await client.get(
            f"/api/v1/students/{student.id}", headers=auth_header(admin_token)
        )
        assert student_response.json()["class_id"] == str(class_b.id)

        enrollments = await client.get(
            f"/api/v1/students/{student.id}/enrollments", headers=auth_header(admin_token)
        )
        by_class = {e["class_id"]: e for e in enrollments.json()}
        assert by_class[str(class_a.id)]["is_active"] is False
        assert by_class[str(class_a.id)]["withdrawal_date"] == "2025-05-05"
        assert by_class[str(class_b.id)]["is_active"] is True
        assert sum(e["is_active"] for e in enrollments.json()) == 1

    async def test_same_class_rejected(
        self, client: AsyncClient, db: AsyncSession, admin_token: str
    ):
        school_class = await make_class(db)
        student = await make_student(db, class_id=school_class.id)

        response = await client.post(
            "/api/v1/transfers",
            headers=auth_header(admin_token),
            json={
                "student_id": str(student.id),
                "transfer_type": "internal",
                "new_class_id": str(school_class.id),
            },
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Student is already in the selected class"

    async def test_new_class_required(
        self, client: AsyncClient, db: AsyncSession, admin_token: str
    ):
        student = await make_student(db)

        response = await client.post(
            "/api/v1/transfers",
            headers=auth_header(admin_token),
            json={"student_id": str(student.id), "transfer_type": "internal"},
        )

        assert response.status_code == 422

    async def test_unknown_class(self, client: AsyncClient, db: AsyncSession, admin_token: str):
        student = await make_student(db)

        response = await client.post(
            "/api/v1/transfers",
            headers=auth_header(admin_token),
            json={
                "student_id": str(student.id),
                "transfer_type": "internal",
                "new_class_id": str(uuid4()),
            },
        )

        assert response.status_code == 404

    async def test_unknown_student(self, client: AsyncClient, db: AsyncSession, admin_token: str):
        school_class = await make_class(db)

        response = await client.post(
            "/api/v1/transfers",
            headers=auth_header(admin_token),
            json={
                "student_id": str(uuid4()),
                "transfer_type": "internal",
                "new_class_id": str(school_class.id),
            },
        )

        assert response.status_code == 404


class TestExternalTransfer:
    """Tests for students leaving the school."""

    async def test_external_transfer(
        self, client: AsyncClient, db: AsyncSession, admin_token: str
    ):
        """Test the student is deactivated and removed from the class."""
        school_class = await make_class(db)
        student = await make_student(db, class_id=school_class.id)
        await _enroll(client, admin_token, student.id, school_class.id)

        response = await client.post(
            "/api/v1/transfers",
            headers=auth_header(admin_token),
            json={
                "student_id": str(student.id),
                "transfer_type": "external",
                "destination_school": "Hillside Academy",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["new_class_id"] is None
        assert data["destination_school"] == "Hillside Academy"
        assert data["effective_date"] == date.today().isoformat()

        student_response = await client.get(
            f"/api/v1/students/{student.id}", headers=auth_header(admin_token)
        )
        assert student_response.json()["is_active"] is False
        assert student_response.json()["class_id"] is None

        enrollments = await client.get(
            f"/api/v1/students/{student.id}/enrollments", headers=auth_header(admin_token)
        )
        assert all(not e["is_active"] for e in enrollments.json())

    async def test_destination_required(
        self, client: AsyncClient, db: AsyncSession, admin_token: str
    ):
        student = await make_student(db)

        response = await client.post(
            "/api/v1/transfers",
            headers=auth_header(admin_token),
            json={"student_id": str(student.id), "transfer_type": "external", "destination_school": " "},
        )

        assert response.status_code == 422


class TestTransferQueries:
    """Tests for listing transfers."""

    async def test_filter_by_type(self, client: AsyncClient, db: AsyncSession, admin_token: str):
        class_a = await make_class(db, "Stage 1A", "Stage 1")
        class_b = await make_class(db, "Stage 1B", "Stage 1")
        mover = await make_student(db, "JPS001", class_a.id)
        leaver = await make_student(db, "JPS002", class_a.id)

        await client.post(
            "/api/v1/transfers",
            headers=auth_header(admin_token),
            json={"student_id": str(mover.id), "transfer_type": "internal", "new_class_id": str(class_b.id)},
        )
        await client.post(
            "/api/v1/transfers",
            headers=auth_header(admin_token),
            json={"student_id": str(leaver.id), "transfer_type": "external", "destination_school": "Hillside"},
        )

        response = await client.get(
            "/api/v1/transfers",
            headers=auth_header(admin_token),
            params={"transfer_type": "external"},
        )

        assert response.status_code == 200
        assert [t["student_id"] for t in response.json()] == [str(leaver.id)]

        history = await client.get(
            f"/api/v1/students/{mover.id}/transfers", headers=auth_header(admin_token)
        )
        assert len(history.json()) == 1
        transfer_id = history.json()[0]["id"]

        single = await client.get(
            f"/api/v1/transfers/{transfer_id}", headers=auth_header(admin_token)
        )
        assert single.status_code == 200
        assert single.json()["transfer_type"] == "internal"

    async def test_transfer_not_found(self, client: AsyncClient, admin_token: str):
        response = await client.get(
            f"/api/v1/transfers/{uuid4()}", headers=auth_header(admin_token)
        )

        assert response.status_code == 404

    async def test_teacher_cannot_transfer(
        self, client: AsyncClient, db: AsyncSession, teacher_token: str
    ):
        student = await make_student(db)

        response = await client.post(
            "/api/v1/transfers",
            headers=auth_header(teacher_token),
            json={"student_id": str(student.id), "transfer_type": "external", "destination_school": "Hillside"},
        )

        assert response.status_code == 403


class TestEnrollment:
    """Tests for enrolling students."""

    async def test_enroll_reactivates_student(
        self, client: AsyncClient, db: AsyncSession, admin_token: str
    ):
        school_class = await make_class(db)
        student = await make_student(db)
        student.is_active = False
        await db.commit()

        data = await _enroll(client, admin_token, student.id, school_class.id)

        assert data["is_active"] is True
        assert data["enrollment_date"] == date.today().isoformat()

        student_response = await client.get(
            f"/api/v1/students/{student.id}", headers=auth_header(admin_token)
        )
        assert student_response.json()["is_active"] is True
        assert student_response.json()["class_id"] == str(school_class.id)

    async def test_reenrolling_closes_previous(
        self, client: AsyncClient, db: AsyncSession, admin_token: str
    ):
        class_a = await make_class(db, "Stage 1A", "Stage 1")
        class_b = await make_class(db, "Stage 1B", "Stage 1")
        student = await make_student(db)

        first = await _enroll(client, admin_token, student.id, class_a.id)
        await _enroll(client, admin_token, student.id, class_b.id)

        enrollments = await client.get(
            f"/api/v1/students/{student.id}/enrollments", headers=auth_header(admin_token)
        )
        active = [e for e in enrollments.json() if e["is_active"]]
        assert [e["class_id"] for e in active] == [str(class_b.id)]
        closed = next(e for e in enrollments.json() if e["id"] == first["id"])
        assert closed["withdrawal_date"] == date.today().isoformat()

    async def test_inactive_class_rejected(
        self, client: AsyncClient, db: AsyncSession, admin_token: str
    ):
        school_class = await make_class(db)
        school_class.is_active = False
        await db.commit()
        student = await make_student(db)

        response = await client.post(
            "/api/v1/enrollments",
            headers=auth_header(admin_token),
            json={"student_id": str(student.id), "class_id": str(school_class.id)},
        )

        assert response.status_code == 400
