"""Tests for authentication endpoints."""

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.permissions import Role
from app.models.user import User
from app.services.auth import create_user
from tests.conftest import PASSWORD, _create_user, auth_header


class TestLogin:
    """Tests for login endpoints."""

    async def test_login_success(self, client: AsyncClient, admin_user: User):
        """Test successful login."""
        response = await client.post(
            "/api/v1/auth/login",
            json={"username": "admin", "password": PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert "access_token" in data
        assert "refresh_token" in data
        assert data["token_type"] == "bearer"

    async def test_login_with_email(self, client: AsyncClient, admin_user: User):
        """Test email works as login, ignoring case."""
        response = await client.post(
            "/api/v1/auth/login",
            json={"username": "Admin@Example.com", "password": PASSWORD},
        )

        assert response.status_code == 200

    async def test_login_wrong_password(self, client: AsyncClient, admin_user: User):
        """Test login with wrong password."""
        response = await client.post(
            "/api/v1/auth/login",
            json={"username": "admin", "password": "wrongpassword"},
        )

        assert response.status_code == 401
        assert "Incorrect username or password" in response.json()["detail"]

    async def test_login_nonexistent_user(self, client: AsyncClient):
        """Test login with non-existent user."""
        response = await client.post(
            "/api/v1/auth/login",
            json={"username": "nobody", "password": PASSWORD},
        )

        assert response.status_code == 401

    async def test_login_inactive_user(self, client: AsyncClient, db: AsyncSession):
        """Test deactivated accounts cannot log in."""
        await _create_user(db, "retired", Role.TEACHER, is_active=False)

        response = await client.post(
            "/api/v1/auth/login",
            json={"username": "retired", "password": PASSWORD},
        )

        assert response.status_code == 403

    async def test_login_missing_password(self, client: AsyncClient):
        """Test login body validation."""
        response = await client.post("/api/v1/auth/login", json={"username": "admin"})

        assert response.status_code == 422

    async def test_login_form(self, client: AsyncClient, admin_user: User):
        """Test the OAuth2 form login."""
        response = await client.post(
            "/api/v1/auth/login/form",
            data={"username": "admin", "password": PASSWORD},
        )

        assert response.status_code == 200
        assert "access_token" in response.json()


class TestRefresh:
    """Tests for token refresh endpoint."""

    async def test_refresh_success(self, client: AsyncClient, admin_user: User):
        """Test successful token refresh."""
        login_response = await client.post(
            "/api/v1/auth/login",
            json={"username": "admin", "password": PASSWORD},
        )
        refresh_token = login_response.json()["refresh_token"]

        response = await client.post(
            "/api/v1/auth/refresh",
            json={"refresh_token": refresh_token},
        )

        assert response.status_code == 200
        data = response.json()
        assert "access_token" in data
        assert "refresh_token" in data

    async def test_refresh_invalid_token(self, client: AsyncClient):
        """Test refresh with invalid token."""
        response = await client.post(
            "/api/v1/auth/refresh",
            json={"refresh_token": "invalid-token"},
        )

        assert response.status_code == 401

    async def test_refresh_with_access_token(self, client: AsyncClient, admin_token: str):
        """Test that access token cannot be used for refresh."""
        response = await client.post(
            "/api/v1/auth/refresh",
            json={"refresh_token": admin_token},
        )

        assert response.status_code == 401
        assert "Invalid refresh token" in response.json()["detail"]


class TestMe:
    """Tests for the current user endpoint."""

    async def test_me(self, client: AsyncClient, teacher_token: str):
        response = await client.get("/api/v1/auth/me", headers=auth_header(teacher_token))

        assert response.status_code == 200
        data = response.json()
        assert data["username"] == "teacher"
        assert data["role"] == "teacher"
        assert data["is_demo"] is False

    async def test_me_requires_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me")

        assert response.status_code == 401

    async def test_refresh_token_is_not_an_access_token(
        self, client: AsyncClient, admin_user: User
    ):
        """Test protected routes reject refresh tokens."""
        login_response = await client.post(
            "/api/v1/auth/login",
            json={"username": "admin", "password": PASSWORD},
        )
        refresh_token = login_response.json()["refresh_token"]

        response = await client.get("/api/v1/auth/me", headers=auth_header(refresh_token))

        assert response.status_code == 401


class TestCreateUser:
    """Tests for the user creation service."""

    async def test_password_is_hashed(self, client: AsyncClient, db: AsyncSession):
        user = await create_user(db, "headmaster", "s3cret-pass", Role.ADMIN)

        assert user.password_hash != "s3cret-pass"
        assert user.email is None

        response = await client.post(
            "/api/v1/auth/login",
            json={"username": "headmaster", "password": "s3cret-pass"},
        )
        assert response.status_code == 200
