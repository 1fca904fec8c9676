"""Add default module access to settings.

Fills a missing moduleAccess document on the existing settings row, or
creates the settings row when there is none.

Revision ID: 1700460000000
Revises: 1700450000000
"""

import logging
import uuid

import sqlalchemy as sa
from alembic import op

from app.core.permissions import default_module_access

logger = logging.getLogger(__name__)

revision: int = 1700460000000
down_revision: int | None = 1700450000000
name = "AddDefaultModuleAccess"

settings = sa.table(
    "settings",
    sa.column("id", sa.Uuid),
    sa.column("studentIdPrefix", sa.String),
    sa.column("currencySymbol", sa.String),
    sa.column("moduleAccess", sa.JSON),
)


def upgrade() -> None:
    bind = op.get_bind()
    existing = bind.execute(sa.select(settings.c.id).limit(1)).first()

    if existing:
        bind.execute(
            sa.update(settings)
            .where(settings.c.moduleAccess.is_(None))
            .values(moduleAccess=default_module_access())
        )
        logger.info("Added default module access to existing settings")
    else:
        bind.execute(
            sa.insert(settings).values(
                id=uuid.uuid4(),
                studentIdPrefix="JPS",
                currencySymbol="KES",
                moduleAccess=default_module_access(),
            )
        )
        logger.info("Created settings record with default module access")


def downgrade() -> None:
    op.get_bind().execute(sa.update(settings).values(moduleAccess=sa.null()))
