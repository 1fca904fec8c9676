"""Tests for timetable API."""

from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.timetable import DEFAULT_DAYS
from tests.conftest import auth_header, make_class, make_subject, make_teacher


async def _create_version(client: AsyncClient, token: str, name: str = "Term 1 2025") -> dict:
    response = await client.post(
        "/api/v1/timetable/versions",
        headers=auth_header(token),
        json={"name": name},
    )
    assert response.status_code == 201
    return response.json()


@pytest_asyncio.fixture
async def lesson(db: AsyncSession) -> dict:
    """Ids of a teacher, two classes and a subject."""
    teacher = await make_teacher(db)
    class_a = await make_class(db, "Stage 4A", "Stage 4")
    class_b = await make_class(db, "Stage 4B", "Stage 4")
    subject = await make_subject(db)
    return {
        "teacher_id": str(teacher.id),
        "class_id": str(class_a.id),
        "other_class_id": str(class_b.id),
        "subject_id": str(subject.id),
    }


def _slot(lesson: dict, **overrides) -> dict:
    slot = {
        "teacher_id": lesson["teacher_id"],
        "class_id": lesson["class_id"],
        "subject_id": lesson["subject_id"],
        "day_of_week": "Monday",
        "period_number": 1,
        "start_time": "08:00",
        "end_time": "08:40",
    }
    slot.update(overrides)
    return slot


class TestConfig:
    """Tests for the timetable configuration."""

    async def test_default_config(self, client: AsyncClient, teacher_token: str):
        response = await client.get("/api/v1/timetable/config", headers=auth_header(teacher_token))

        assert response.status_code == 200
        data = response.json()
        assert data["days_of_week"] == DEFAULT_DAYS
        assert data["periods_per_day"] == 8
        assert data["school_start_time"] == "08:00"
        assert data["break_periods"] == []

    async def test_save_config(self, client: AsyncClient, admin_token: str):
        response = await client.put(
            "/api/v1/timetable/config",
            headers=auth_header(admin_token),
            json={
                "periods_per_day": 7,
                "school_start_time": "07:30",
                "break_periods": [{"afterPeriod": 3, "durationMinutes": 20}],
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["periods_per_day"] == 7
        assert data["school_start_time"] == "07:30"
        assert data["break_periods"] == [
            {"afterPeriod": 3, "durationMinutes": 20, "name": "Break"}
        ]

    async def test_invalid_time(self, client: AsyncClient, admin_token: str):
        response = await client.put(
            "/api/v1/timetable/config",
            headers=auth_header(admin_token),
            json={"school_start_time": "7:30am"},
        )

        assert response.status_code == 422

    async def test_teacher_cannot_save(self, client: AsyncClient, teacher_token: str):
        response = await client.put(
            "/api/v1/timetable/config",
            headers=auth_header(teacher_token),
            json={"periods_per_day": 6},
        )

        assert response.status_code == 403


class TestVersions:
    """Tests for timetable versions."""

    async def test_create_version(self, client: AsyncClient, admin_user, admin_token: str):
        data = await _create_version(client, admin_token)

        assert data["is_active"] is False
        assert data["is_published"] is False
        assert data["created_by"] == str(admin_user.id)

    async def test_single_active_version(self, client: AsyncClient, admin_token: str):
        """Test activating one version deactivates the others."""
        first = await _create_version(client, admin_token, "Draft A")
        second = await _create_version(client, admin_token, "Draft B")

        await client.post(
            f"/api/v1/timetable/versions/{first['id']}/activate", headers=auth_header(admin_token)
        )
        response = await client.post(
            f"/api/v1/timetable/versions/{second['id']}/activate", headers=auth_header(admin_token)
        )
        assert response.status_code == 200
        assert response.json()["is_active"] is True

        versions = await client.get("/api/v1/timetable/versions", headers=auth_header(admin_token))
        active = [v["id"] for v in versions.json() if v["is_active"]]
        assert active == [second["id"]]

    async def test_single_published_version(self, client: AsyncClient, admin_token: str):
        first = await _create_version(client, admin_token, "Draft A")
        second = await _create_version(client, admin_token, "Draft B")

        await client.post(
            f"/api/v1/timetable/versions/{first['id']}/publish", headers=auth_header(admin_token)
        )
        await client.post(
            f"/api/v1/timetable/versions/{second['id']}/publish", headers=auth_header(admin_token)
        )

        versions = await client.get("/api/v1/timetable/versions", headers=auth_header(admin_token))
        published = [v["id"] for v in versions.json() if v["is_published"]]
        assert published == [second["id"]]

    async def test_delete_version_removes_slots(
        self, client: AsyncClient, admin_token: str, lesson: dict
    ):
        version = await _create_version(client, admin_token)
        await client.post(
            f"/api/v1/timetable/versions/{version['id']}/slots",
            headers=auth_header(admin_token),
            json=_slot(lesson),
        )

        response = await client.delete(
            f"/api/v1/timetable/versions/{version['id']}", headers=auth_header(admin_token)
        )
        assert response.status_code == 204

        slots = await client.get(
            f"/api/v1/timetable/versions/{version['id']}/slots", headers=auth_header(admin_token)
        )
        assert slots.status_code == 404

    async def test_teacher_cannot_create_version(self, client: AsyncClient, teacher_token: str):
        response = await client.post(
            "/api/v1/timetable/versions",
            headers=auth_header(teacher_token),
            json={"name": "Term 1"},
        )

        assert response.status_code == 403


class TestSlots:
    """Tests for timetable slots."""

    async def test_create_and_list_slots(
        self, client: AsyncClient, admin_token: str, teacher_token: str, lesson: dict
    ):
        version = await _create_version(client, admin_token)
        url = f"/api/v1/timetable/versions/{version['id']}/slots"

        created = await client.post(url, headers=auth_header(admin_token), json=_slot(lesson))
        assert created.status_code == 201
        assert created.json()["is_manually_edited"] is False

        await client.post(
            url,
            headers=auth_header(admin_token),
            json=_slot(lesson, day_of_week="Tuesday", period_number=2),
        )

        monday = await client.get(
            url, headers=auth_header(teacher_token), params={"day_of_week": "Monday"}
        )
        assert monday.status_code == 200
        assert [s["period_number"] for s in monday.json()] == [1]

    async def test_teacher_double_booking_rejected(
        self, client: AsyncClient, admin_token: str, lesson: dict
    ):
        """Test a teacher cannot teach two classes in the same period."""
        version = await _create_version(client, admin_token)
        url = f"/api/v1/timetable/versions/{version['id']}/slots"
        await client.post(url, headers=auth_header(admin_token), json=_slot(lesson))

        response = await client.post(
            url,
            headers=auth_header(admin_token),
            json=_slot(lesson, class_id=lesson["other_class_id"]),
        )

        assert response.status_code == 409

    async def test_class_double_booking_rejected(
        self, client: AsyncClient, db: AsyncSession, admin_token: str, lesson: dict
    ):
        """Test a class cannot have two lessons in the same period."""
        other_teacher = await make_teacher(db, "T002")
        version = await _create_version(client, admin_token)
        url = f"/api/v1/timetable/versions/{version['id']}/slots"
        await client.post(url, headers=auth_header(admin_token), json=_slot(lesson))

        response = await client.post(
            url,
            headers=auth_header(admin_token),
            json=_slot(lesson, teacher_id=str(other_teacher.id)),
        )

        assert response.status_code == 409

    async def test_same_period_in_another_version(
        self, client: AsyncClient, admin_token: str, lesson: dict
    ):
        """Test bookings only conflict within one version."""
        first = await _create_version(client, admin_token, "Draft A")
        second = await _create_version(client, admin_token, "Draft B")

        for version in (first, second):
            response = await client.post(
                f"/api/v1/timetable/versions/{version['id']}/slots",
                headers=auth_header(admin_token),
                json=_slot(lesson),
            )
            assert response.status_code == 201

    async def test_manual_edit_is_tracked(
        self, client: AsyncClient, admin_user, admin_token: str, lesson: dict
    ):
        version = await _create_version(client, admin_token)
        created = await client.post(
            f"/api/v1/timetable/versions/{version['id']}/slots",
            headers=auth_header(admin_token),
            json=_slot(lesson),
        )

        response = await client.patch(
            f"/api/v1/timetable/slots/{created.json()['id']}",
            headers=auth_header(admin_token),
            json={"room": "Lab 2", "period_number": 3},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["room"] == "Lab 2"
        assert data["period_number"] == 3
        assert data["is_manually_edited"] is True
        assert data["edited_by"] == str(admin_user.id)
        assert data["edited_at"] is not None

    async def test_edit_into_conflict_rejected(
        self, client: AsyncClient, admin_token: str, lesson: dict
    ):
        version = await _create_version(client, admin_token)
        url = f"/api/v1/timetable/versions/{version['id']}/slots"
        await client.post(url, headers=auth_header(admin_token), json=_slot(lesson))
        second = await client.post(
            url, headers=auth_header(admin_token), json=_slot(lesson, period_number=2)
        )

        response = await client.patch(
            f"/api/v1/timetable/slots/{second.json()['id']}",
            headers=auth_header(admin_token),
            json={"period_number": 1},
        )

        assert response.status_code == 409

    async def test_delete_slot(self, client: AsyncClient, admin_token: str, lesson: dict):
        version = await _create_version(client, admin_token)
        created = await client.post(
            f"/api/v1/timetable/versions/{version['id']}/slots",
            headers=auth_header(admin_token),
            json=_slot(lesson),
        )

        response = await client.delete(
            f"/api/v1/timetable/slots/{created.json()['id']}", headers=auth_header(admin_token)
        )
        assert response.status_code == 204

        again = await client.delete(
            f"/api/v1/timetable/slots/{created.json()['id']}", headers=auth_header(admin_token)
        )
        assert again.status_code == 404

    @pytest.mark.parametrize(
        ("field", "detail"),
        [
            ("teacher_id", "Teacher not found"),
            ("class_id", "Class not found"),
            ("subject_id", "Subject not found"),
        ],
    )
    async def test_unknown_reference_on_create(
        self, client: AsyncClient, admin_token: str, lesson: dict, field: str, detail: str
    ):
        version = await _create_version(client, admin_token)

        response = await client.post(
            f"/api/v1/timetable/versions/{version['id']}/slots",
            headers=auth_header(admin_token),
            json=_slot(lesson, **{field: str(uuid4())}),
        )

        assert response.status_code == 404
        assert response.json()["detail"] == detail

    @pytest.mark.parametrize(
        ("field", "detail"),
        [
            ("teacher_id", "Teacher not found"),
            ("class_id", "Class not found"),
            ("subject_id", "Subject not found"),
        ],
    )
    async def test_unknown_reference_on_edit(
        self, client: AsyncClient, admin_token: str, lesson: dict, field: str, detail: str
    ):
        version = await _create_version(client, admin_token)
        created = await client.post(
            f"/api/v1/timetable/versions/{version['id']}/slots",
            headers=auth_header(admin_token),
            json=_slot(lesson),
        )

        response = await client.patch(
            f"/api/v1/timetable/slots/{created.json()['id']}",
            headers=auth_header(admin_token),
            json={field: str(uuid4())},
        )
        assert response.status_code == 404
        assert response.json()["detail"] == detail

        slots = await client.get(
            f"/api/v1/timetable/versions/{version['id']}/slots", headers=auth_header(admin_token)
        )
        assert slots.json()[0][field] == lesson[field]
        assert slots.json()[0]["is_manually_edited"] is False
