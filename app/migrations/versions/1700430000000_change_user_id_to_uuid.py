"""Change teachers.userId from varchar to uuid.

Revision ID: 1700430000000
Revises: 1700420000000
"""

import sqlalchemy as sa
from alembic import op

revision: int = 1700430000000
down_revision: int | None = 1700420000000
name = "ChangeUserIdToUuid"


def upgrade() -> None:
    with op.batch_alter_table("teachers") as batch_op:
        batch_op.alter_column(
            "userId",
            type_=sa.Uuid,
            existing_type=sa.String(255),
            existing_nullable=True,
            postgresql_using='"userId"::uuid',
        )


def downgrade() -> None:
    with op.batch_alter_table("teachers") as batch_op:
        batch_op.alter_column(
            "userId",
            type_=sa.String(255),
            existing_type=sa.Uuid,
            existing_nullable=True,
            postgresql_using='"userId"::varchar',
        )
