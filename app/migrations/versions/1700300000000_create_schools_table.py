"""Create the single-tenant schools profile table.

Databases that went through the multitenancy steps already have the table;
only the unique index on the tenant code is ensured then.

Revision ID: 1700300000000
Revises: 1700290000000
"""

import sqlalchemy as sa
from alembic import op

from app.migrations.helpers import (
    created_at,
    drop_index_if_exists,
    has_index,
    has_table,
    updated_at,
    uuid_pk,
)

revision: int = 1700300000000
down_revision: int | None = 1700290000000
name = "CreateSchoolsTable"


def upgrade() -> None:
    if not has_table("schools"):
        op.create_table(
            "schools",
            uuid_pk(),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("schoolid", sa.String(64), nullable=False),
            sa.Column("logoUrl", sa.Text, nullable=True),
            sa.Column("address", sa.String(255), nullable=True),
            sa.Column("phone", sa.String(64), nullable=True),
            sa.Column("isActive", sa.Boolean, nullable=False, server_default=sa.true()),
            sa.Column("subscriptionEndDate", sa.DateTime, nullable=True),
            created_at(),
            updated_at(),
        )

    if not has_index("schools", "UQ_schools_schoolid"):
        op.create_index("UQ_schools_schoolid", "schools", ["schoolid"], unique=True)


def downgrade() -> None:
    drop_index_if_exists("schools", "UQ_schools_schoolid")
    if has_table("schools"):
        op.drop_table("schools")
