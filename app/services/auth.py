"""Authentication service."""

import logging
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.permissions import Role
from app.core.security import get_password_hash, verify_password
from app.models.user import User

logger = logging.getLogger(__name__)


async def get_user_by_id(db: AsyncSession, user_id: UUID) -> User | None:
    """Get user by ID."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_login(db: AsyncSession, login: str) -> User | None:
    """Get user by username, or by email (case-insensitive)."""
    result = await db.execute(
        select(User).where(
            or_(
                User.username == login,
                func.lower(User.email) == login.lower(),
            )
        )
    )
    return result.scalars().first()


async def authenticate_user(
    db: AsyncSession,
    login: str,
    password: str,
) -> User | None:
    """Authenticate user with username/email and password."""
    user = await get_user_by_login(db, login)

    if not user:
        return None

    if not verify_password(password, user.password_hash):
        logger.info("Failed login for %s", login)
        return None

    return user


async def create_user(
    db: AsyncSession,
    username: str,
    password: str,
    role: Role,
    email: str | None = None,
    is_demo: bool = False,
) -> User:
    """Create a user with a hashed password."""
    user = User(
        username=username,
        email=email,
        password_hash=get_password_hash(password),
        role=role,
        is_demo=is_demo,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user
