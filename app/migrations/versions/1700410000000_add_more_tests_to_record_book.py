"""Add test5..test10 and their topics to record_books.

Revision ID: 1700410000000
Revises: 1700400000000
"""

import sqlalchemy as sa
from alembic import op

from app.migrations.helpers import has_column

revision: int = 1700410000000
down_revision: int | None = 1700400000000
name = "AddMoreTestsToRecordBook"

NUMBERS = range(5, 11)


def upgrade() -> None:
    for i in NUMBERS:
        if not has_column("record_books", f"test{i}"):
            op.add_column("record_books", sa.Column(f"test{i}", sa.Numeric(5, 2), nullable=True))
        if not has_column("record_books", f"test{i}Topic"):
            op.add_column(
                "record_books", sa.Column(f"test{i}Topic", sa.String(100), nullable=True)
            )


def downgrade() -> None:
    with op.batch_alter_table("record_books") as batch_op:
        for i in reversed(NUMBERS):
            batch_op.drop_column(f"test{i}Topic")
            batch_op.drop_column(f"test{i}")
