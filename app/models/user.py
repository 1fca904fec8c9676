"""User model."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import BaseModel
from app.core.permissions import Role


class User(BaseModel):
    """User model for authentication and authorization."""

    __tablename__ = "users"

    # Nullable; unique among users that have one
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    username: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    password_hash: Mapped[str] = mapped_column("password", String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        String(20),
        nullable=False,
        default=Role.STUDENT,
    )
    is_active: Mapped[bool] = mapped_column("isActive", Boolean, default=True, nullable=False)
    must_change_password: Mapped[bool] = mapped_column(
        "mustChangePassword",
        Boolean,
        default=False,
        nullable=False,
    )
    is_temporary_account: Mapped[bool] = mapped_column(
        "isTemporaryAccount",
        Boolean,
        default=False,
        nullable=False,
    )
    is_demo: Mapped[bool] = mapped_column("isDemo", Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        "createdAt",
        DateTime,
        server_default=func.now(),
        default=func.now(),
        nullable=False,
    )

    @property
    def is_superuser(self) -> bool:
        """Check if user operates the platform."""
        return self.role == Role.SUPERADMIN

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, role={self.role})>"
