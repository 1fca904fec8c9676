"""Change record_books test scores from decimal to integer.

Scores are rounded to the nearest integer before the type changes, so
87.6 becomes 88 rather than 87.

Revision ID: 1700450000000
Revises: 1700440000000
"""

import sqlalchemy as sa
from alembic import op

revision: int = 1700450000000
down_revision: int | None = 1700440000000
name = "ChangeTestMarksToInteger"

COLUMNS = [f"test{i}" for i in range(1, 11)]


def upgrade() -> None:
    record_books = sa.table("record_books", *[sa.column(c, sa.Numeric(5, 2)) for c in COLUMNS])
    op.get_bind().execute(
        sa.update(record_books).values(
            {c: sa.func.round(record_books.c[c]) for c in COLUMNS}
        )
    )

    with op.batch_alter_table("record_books") as batch_op:
        for column in COLUMNS:
            batch_op.alter_column(
                column,
                type_=sa.Integer,
                existing_type=sa.Numeric(5, 2),
                existing_nullable=True,
                postgresql_using=f'ROUND("{column}")::integer',
            )


def downgrade() -> None:
    with op.batch_alter_table("record_books") as batch_op:
        for column in COLUMNS:
            batch_op.alter_column(
                column,
                type_=sa.Numeric(5, 2),
                existing_type=sa.Integer,
                existing_nullable=True,
            )
