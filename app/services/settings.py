"""Settings service."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.permissions import default_module_access, validate_module_access
from app.models.settings import Settings
from app.schemas.settings import SettingsUpdate

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY_SYMBOL = "KES"
DEFAULT_STUDENT_ID_PREFIX = "JPS"


async def get_settings(db: AsyncSession) -> Settings | None:
    """Get the settings row (the oldest one if several exist)."""
    result = await db.execute(select(Settings).order_by(Settings.created_at.asc()).limit(1))
    return result.scalar_one_or_none()


async def get_or_create_settings(db: AsyncSession) -> Settings:
    """Get the settings row, creating it with defaults when missing."""
    school_settings = await get_settings(db)
    if school_settings is not None:
        return school_settings

    school_settings = Settings(
        student_id_prefix=DEFAULT_STUDENT_ID_PREFIX,
        currency_symbol=DEFAULT_CURRENCY_SYMBOL,
        module_access=default_module_access(),
    )
    db.add(school_settings)
    await db.commit()
    await db.refresh(school_settings)
    logger.info("Created default settings row %s", school_settings.id)
    return school_settings


async def update_settings(db: AsyncSession, settings_data: SettingsUpdate) -> Settings:
    """Update settings; blank currency/prefix fall back to the defaults."""
    school_settings = await get_or_create_settings(db)
    update_data = settings_data.model_dump(exclude_unset=True)

    if "currency_symbol" in update_data:
        update_data["currency_symbol"] = update_data["currency_symbol"] or DEFAULT_CURRENCY_SYMBOL
    if "student_id_prefix" in update_data:
        update_data["student_id_prefix"] = (
            update_data["student_id_prefix"] or DEFAULT_STUDENT_ID_PREFIX
        )

    for field, value in update_data.items():
        setattr(school_settings, field, value)

    await db.commit()
    await db.refresh(school_settings)
    return school_settings


async def get_module_access(db: AsyncSession) -> dict[str, dict[str, bool]]:
    """Current module access; a missing document means the defaults."""
    school_settings = await get_or_create_settings(db)
    return school_settings.module_access or default_module_access()


async def set_module_access(
    db: AsyncSession,
    module_access: dict[str, dict[str, bool]],
) -> dict[str, dict[str, bool]]:
    """Replace the module access document after validating it."""
    validated = validate_module_access(module_access)
    school_settings = await get_or_create_settings(db)
    school_settings.module_access = validated
    await db.commit()
    await db.refresh(school_settings)
    return school_settings.module_access
