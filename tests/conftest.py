"""Test configuration and fixtures."""

import asyncio
import shutil
from collections.abc import AsyncGenerator
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from pathlib import Path
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.core.database import get_db
from app.core.permissions import Role
from app.core.security import get_password_hash
from app.migrations.runner import MigrationRunner
from app.models.school_class import SchoolClass
from app.models.student import Student
from app.models.subject import Subject
from app.models.teacher import Teacher
from app.models.user import User
from main import app

PASSWORD = "password123"


def sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


def make_engine(path: Path, foreign_keys: bool = True) -> AsyncEngine:
    # NullPool so every test file copy is released when the engine is disposed
    engine = create_async_engine(sqlite_url(path), echo=False, poolclass=NullPool)
    if foreign_keys:
        event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    return engine


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture(scope="session")
def migrated_database(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """A SQLite file migrated to head once per session."""
    path = tmp_path_factory.mktemp("template") / "head.sqlite3"

    # Batch table rebuilds drop and recreate parent tables, so migrations run
    # without foreign key enforcement
    async def migrate() -> None:
        engine = make_engine(path, foreign_keys=False)
        try:
            await MigrationRunner(engine).upgrade()
        finally:
            await engine.dispose()

    # Own thread and loop, apart from the per-test loops of pytest-asyncio
    with ThreadPoolExecutor(max_workers=1) as executor:
        executor.submit(asyncio.run, migrate()).result()
    return path


@pytest_asyncio.fixture
async def test_engine(
    migrated_database: Path, tmp_path: Path
) -> AsyncGenerator[AsyncEngine, None]:
    """Engine on a private copy of the migrated database."""
    path = tmp_path / "test.sqlite3"
    shutil.copyfile(migrated_database, path)
    engine = make_engine(path)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def empty_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Engine on an empty database, for running migrations step by step."""
    engine = make_engine(tmp_path / "empty.sqlite3", foreign_keys=False)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def setup_database(test_engine: AsyncEngine) -> AsyncGenerator[async_sessionmaker, None]:
    """Point the app's database dependency at the test database."""
    session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield session_maker
    app.dependency_overrides.pop(get_db, None)


@pytest_asyncio.fixture
async def db(setup_database: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Get database session for tests."""
    async with setup_database() as session:
        yield session


@pytest_asyncio.fixture
async def client(setup_database: async_sessionmaker) -> AsyncGenerator[AsyncClient, None]:
    """Get async HTTP client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


async def _create_user(
    db: AsyncSession,
    username: str,
    role: Role,
    is_demo: bool = False,
    is_active: bool = True,
) -> User:
    user = User(
        username=username,
        email=f"{username}@example.com",
        password_hash=get_password_hash(PASSWORD),
        role=role,
        is_demo=is_demo,
        is_active=is_active,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def superadmin_user(db: AsyncSession) -> User:
    """Create a superadmin user for tests."""
    return await _create_user(db, "superadmin", Role.SUPERADMIN)


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession) -> User:
    """Create a school admin for tests."""
    return await _create_user(db, "admin", Role.ADMIN)


@pytest_asyncio.fixture
async def teacher_user(db: AsyncSession) -> User:
    """Create a teacher account for tests."""
    return await _create_user(db, "teacher", Role.TEACHER)


@pytest_asyncio.fixture
async def demo_user(db: AsyncSession) -> User:
    """Create a demo admin account for tests."""
    return await _create_user(db, "demo", Role.ADMIN, is_demo=True)


async def _login(client: AsyncClient, username: str) -> str:
    response = await client.post(
        "/api/v1/auth/login",
        json={"username": username, "password": PASSWORD},
    )
    return response.json()["access_token"]


@pytest_asyncio.fixture
async def superadmin_token(client: AsyncClient, superadmin_user: User) -> str:
    """Get auth token for the superadmin."""
    return await _login(client, "superadmin")


@pytest_asyncio.fixture
async def admin_token(client: AsyncClient, admin_user: User) -> str:
    """Get auth token for the school admin."""
    return await _login(client, "admin")


@pytest_asyncio.fixture
async def teacher_token(client: AsyncClient, teacher_user: User) -> str:
    """Get auth token for the teacher."""
    return await _login(client, "teacher")


@pytest_asyncio.fixture
async def demo_token(client: AsyncClient, demo_user: User) -> str:
    """Get auth token for the demo account."""
    return await _login(client, "demo")


def auth_header(token: str) -> dict[str, str]:
    """Create authorization header."""
    return {"Authorization": f"Bearer {token}"}


# ============== Factories ==============


async def make_class(db: AsyncSession, name: str = "Stage 1A", form: str = "Stage 1") -> SchoolClass:
    school_class = SchoolClass(name=name, form=form)
    db.add(school_class)
    await db.commit()
    await db.refresh(school_class)
    return school_class


async def make_teacher(db: AsyncSession, teacher_id: str = "T001") -> Teacher:
    teacher = Teacher(first_name="Tendai", last_name="Ncube", teacher_id=teacher_id)
    db.add(teacher)
    await db.commit()
    await db.refresh(teacher)
    return teacher


async def make_subject(db: AsyncSession, code: str = "MATH") -> Subject:
    subject = Subject(name=f"Subject {code}", code=code)
    db.add(subject)
    await db.commit()
    await db.refresh(subject)
    return subject


async def make_student(
    db: AsyncSession,
    student_number: str = "JPS001",
    class_id: UUID | None = None,
) -> Student:
    student = Student(
        first_name="Rudo",
        last_name="Moyo",
        student_number=student_number,
        date_of_birth=date(2015, 5, 17),
        gender="Female",
        class_id=class_id,
    )
    db.add(student)
    await db.commit()
    await db.refresh(student)
    return student
