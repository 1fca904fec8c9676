"""Rename teachers.employeeNumber to teachers.teacherId.

The unique constraint follows the column.

Revision ID: 1700420000000
Revises: 1700410000000
"""

import logging

import sqlalchemy as sa
from alembic import op

from app.migrations.helpers import has_column

logger = logging.getLogger(__name__)

revision: int = 1700420000000
down_revision: int | None = 1700410000000
name = "RenameEmployeeNumberToTeacherId"


def _rename(old: str, new: str) -> None:
    if not has_column("teachers", old):
        logger.info("teachers.%s not present, nothing to rename", old)
        return
    with op.batch_alter_table("teachers") as batch_op:
        batch_op.alter_column(
            old,
            new_column_name=new,
            existing_type=sa.String(255),
            existing_nullable=False,
        )


def upgrade() -> None:
    _rename("employeeNumber", "teacherId")


def downgrade() -> None:
    _rename("teacherId", "employeeNumber")
