"""Add test1Date..test10Date to record_books.

Revision ID: 1700440000000
Revises: 1700430000000
"""

import sqlalchemy as sa
from alembic import op

from app.migrations.helpers import has_column

revision: int = 1700440000000
down_revision: int | None = 1700430000000
name = "AddTestDatesToRecordBook"


def upgrade() -> None:
    for i in range(1, 11):
        if not has_column("record_books", f"test{i}Date"):
            op.add_column("record_books", sa.Column(f"test{i}Date", sa.Date, nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("record_books") as batch_op:
        for i in range(1, 11):
            batch_op.drop_column(f"test{i}Date")
