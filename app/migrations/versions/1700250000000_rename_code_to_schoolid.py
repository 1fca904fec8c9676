"""Rename schools.code to schools.schoolid.

The tenant code keeps its uniqueness through a dedicated unique index.

Revision ID: 1700250000000
Revises: 1700240000000
"""

import sqlalchemy as sa
from alembic import op

from app.migrations.helpers import (
    drop_index_if_exists,
    has_column,
    has_index,
    has_unique_constraint,
)

revision: int = 1700250000000
down_revision: int | None = 1700240000000
name = "RenameCodeToSchoolid"


def upgrade() -> None:
    if has_column("schools", "code"):
        had_constraint = has_unique_constraint("schools", "UQ_schools_code")
        with op.batch_alter_table("schools") as batch_op:
            if had_constraint:
                batch_op.drop_constraint("UQ_schools_code", type_="unique")
            batch_op.alter_column(
                "code",
                new_column_name="schoolid",
                existing_type=sa.String(50),
                existing_nullable=False,
            )
        drop_index_if_exists("schools", "UQ_schools_code")

    if not has_index("schools", "UQ_schools_schoolid"):
        op.create_index("UQ_schools_schoolid", "schools", ["schoolid"], unique=True)


def downgrade() -> None:
    drop_index_if_exists("schools", "UQ_schools_schoolid")
    with op.batch_alter_table("schools") as batch_op:
        batch_op.alter_column(
            "schoolid",
            new_column_name="code",
            existing_type=sa.String(50),
            existing_nullable=False,
        )
    op.create_index("UQ_schools_code", "schools", ["code"], unique=True)
