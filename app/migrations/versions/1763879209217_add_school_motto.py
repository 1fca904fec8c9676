"""Add schoolMotto to settings.

Revision ID: 1763879209217
Revises: 1735000000000
"""

import logging

import sqlalchemy as sa
from alembic import op

from app.migrations.helpers import has_column

logger = logging.getLogger(__name__)

revision: int = 1763879209217
down_revision: int | None = 1735000000000
name = "AddSchoolMotto"


def upgrade() -> None:
    if has_column("settings", "schoolMotto"):
        logger.info("schoolMotto column already exists")
        return
    op.add_column("settings", sa.Column("schoolMotto", sa.Text, nullable=True))
    logger.info("Added schoolMotto column to settings table")


def downgrade() -> None:
    if has_column("settings", "schoolMotto"):
        with op.batch_alter_table("settings") as batch_op:
            batch_op.drop_column("schoolMotto")
