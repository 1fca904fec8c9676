"""Add uniformMark to marks.

Revision ID: 1768000000000
Revises: 1767000000000
"""

import sqlalchemy as sa
from alembic import op

from app.migrations.helpers import has_column

revision: int = 1768000000000
down_revision: int | None = 1767000000000
name = "AddUniformMarkToMarks"


def upgrade() -> None:
    if not has_column("marks", "uniformMark"):
        op.add_column("marks", sa.Column("uniformMark", sa.Numeric(5, 2), nullable=True))


def downgrade() -> None:
    if has_column("marks", "uniformMark"):
        with op.batch_alter_table("marks") as batch_op:
            batch_op.drop_column("uniformMark")
