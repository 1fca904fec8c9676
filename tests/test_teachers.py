"""Tests for teachers API."""

from uuid import uuid4

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import auth_header, make_class, make_teacher


class TestTeachers:
    """Tests for teacher records."""

    async def test_admin_can_create_teacher(self, client: AsyncClient, admin_token: str):
        response = await client.post(
            "/api/v1/teachers",
            headers=auth_header(admin_token),
            json={
                "first_name": "Tendai",
                "last_name": "Ncube",
                "teacher_id": "T001",
                "phone_number": "0771234567",
                "date_of_birth": "1985-02-11",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["teacher_id"] == "T001"
        assert data["is_active"] is True
        assert data["user_id"] is None

    async def test_blank_phone_is_stored_as_none(self, client: AsyncClient, admin_token: str):
        response = await client.post(
            "/api/v1/teachers",
            headers=auth_header(admin_token),
            json={"first_name": "Tendai", "last_name": "Ncube", "teacher_id": "T001", "phone_number": ""},
        )

        assert response.status_code == 201
        assert response.json()["phone_number"] is None

    async def test_teacher_cannot_create_teacher(self, client: AsyncClient, teacher_token: str):
        response = await client.post(
            "/api/v1/teachers",
            headers=auth_header(teacher_token),
            json={"first_name": "Tendai", "last_name": "Ncube", "teacher_id": "T001"},
        )

        assert response.status_code == 403

    async def test_list_teachers(self, client: AsyncClient, db: AsyncSession, admin_token: str):
        await make_teacher(db, "T001")
        await make_teacher(db, "T002")

        response = await client.get("/api/v1/teachers", headers=auth_header(admin_token))

        assert response.status_code == 200
        assert {t["teacher_id"] for t in response.json()} == {"T001", "T002"}

    async def test_list_requires_teachers_module(self, client: AsyncClient, teacher_token: str):
        """Test the default access does not give teachers the staff list."""
        response = await client.get("/api/v1/teachers", headers=auth_header(teacher_token))

        assert response.status_code == 403


class TestTeacherClasses:
    """Tests for teacher-class assignments."""

    async def test_assign_and_list(self, client: AsyncClient, db: AsyncSession, admin_token: str):
        teacher = await make_teacher(db)
        school_class = await make_class(db)

        response = await client.post(
            f"/api/v1/teachers/{teacher.id}/classes",
            headers=auth_header(admin_token),
            json={"class_id": str(school_class.id)},
        )

        assert response.status_code == 201
        assert response.json()["class_id"] == str(school_class.id)

        listed = await client.get(
            f"/api/v1/teachers/{teacher.id}/classes", headers=auth_header(admin_token)
        )
        assert listed.status_code == 200
        assert [a["class_id"] for a in listed.json()] == [str(school_class.id)]

    async def test_duplicate_assignment_conflicts(
        self, client: AsyncClient, db: AsyncSession, admin_token: str
    ):
        teacher = await make_teacher(db)
        school_class = await make_class(db)
        url = f"/api/v1/teachers/{teacher.id}/classes"

        await client.post(url, headers=auth_header(admin_token), json={"class_id": str(school_class.id)})
        response = await client.post(
            url, headers=auth_header(admin_token), json={"class_id": str(school_class.id)}
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Class is already assigned to this teacher"

    async def test_one_teacher_many_classes(
        self, client: AsyncClient, db: AsyncSession, admin_token: str
    ):
        teacher = await make_teacher(db)
        class_a = await make_class(db, "Stage 2A", "Stage 2")
        class_b = await make_class(db, "Stage 2B", "Stage 2")

        for school_class in (class_a, class_b):
            response = await client.post(
                f"/api/v1/teachers/{teacher.id}/classes",
                headers=auth_header(admin_token),
                json={"class_id": str(school_class.id)},
            )
            assert response.status_code == 201

        listed = await client.get(
            f"/api/v1/teachers/{teacher.id}/classes", headers=auth_header(admin_token)
        )
        assert len(listed.json()) == 2

    async def test_unknown_class(self, client: AsyncClient, db: AsyncSession, admin_token: str):
        teacher = await make_teacher(db)

        response = await client.post(
            f"/api/v1/teachers/{teacher.id}/classes",
            headers=auth_header(admin_token),
            json={"class_id": str(uuid4())},
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Class not found"

    async def test_unknown_teacher(self, client: AsyncClient, db: AsyncSession, admin_token: str):
        school_class = await make_class(db)

        response = await client.post(
            f"/api/v1/teachers/{uuid4()}/classes",
            headers=auth_header(admin_token),
            json={"class_id": str(school_class.id)},
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Teacher not found"

    async def test_unassign(self, client: AsyncClient, db: AsyncSession, admin_token: str):
        teacher = await make_teacher(db)
        school_class = await make_class(db)
        await client.post(
            f"/api/v1/teachers/{teacher.id}/classes",
            headers=auth_header(admin_token),
            json={"class_id": str(school_class.id)},
        )

        response = await client.delete(
            f"/api/v1/teachers/{teacher.id}/classes/{school_class.id}",
            headers=auth_header(admin_token),
        )
        assert response.status_code == 204

        again = await client.delete(
            f"/api/v1/teachers/{teacher.id}/classes/{school_class.id}",
            headers=auth_header(admin_token),
        )
        assert again.status_code == 404
