"""School model."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import BaseModel, TimestampMixin


class School(TimestampMixin, BaseModel):
    """School model - a tenant profile identified by its school code."""

    __tablename__ = "schools"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Stored trimmed and lowercased; unique index UQ_schools_schoolid
    schoolid: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    logo_url: Mapped[str | None] = mapped_column("logoUrl", Text)
    address: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(64))

    is_active: Mapped[bool] = mapped_column(
        "isActive",
        Boolean,
        default=True,
        nullable=False,
    )
    subscription_end_date: Mapped[datetime | None] = mapped_column(
        "subscriptionEndDate",
        DateTime,
        nullable=True,
    )

    @property
    def is_subscription_active(self) -> bool:
        """Check if school has active subscription."""
        if not self.subscription_end_date:
            return False
        return datetime.now() < self.subscription_end_date

    def __repr__(self) -> str:
        return f"<School(id={self.id}, schoolid={self.schoolid})>"
