"""Add category to subjects.

Existing subjects are categorised as IGCSE.

Revision ID: 1765000000000
Revises: 1764000000000
"""

import logging

import sqlalchemy as sa
from alembic import op

from app.migrations.helpers import has_column

logger = logging.getLogger(__name__)

revision: int = 1765000000000
down_revision: int | None = 1764000000000
name = "AddSubjectCategoryColumn"


def upgrade() -> None:
    if has_column("subjects", "category"):
        logger.info("subjects.category already exists")
        return
    op.add_column(
        "subjects",
        sa.Column("category", sa.String(50), nullable=False, server_default="IGCSE"),
    )


def downgrade() -> None:
    if has_column("subjects", "category"):
        with op.batch_alter_table("subjects") as batch_op:
            batch_op.drop_column("category")
