"""Create record_books table.

One row per (student, teacher, class, term, year) holding up to four test
scores, each with an optional topic.

Revision ID: 1700400000000
Revises: 1700300000000
"""

import sqlalchemy as sa
from alembic import op

from app.migrations.helpers import created_at, has_index, has_table, updated_at, uuid_pk

revision: int = 1700400000000
down_revision: int | None = 1700300000000
name = "CreateRecordBookTable"

UNIQUE_INDEX = "IDX_RECORD_BOOK_UNIQUE"


def score_columns(numbers) -> list[sa.Column]:
    columns = []
    for i in numbers:
        columns.append(sa.Column(f"test{i}", sa.Numeric(5, 2), nullable=True))
        columns.append(sa.Column(f"test{i}Topic", sa.String(100), nullable=True))
    return columns


def upgrade() -> None:
    if not has_table("record_books"):
        op.create_table(
            "record_books",
            uuid_pk(),
            sa.Column("studentId", sa.Uuid, nullable=False),
            sa.Column("teacherId", sa.Uuid, nullable=False),
            sa.Column("classId", sa.Uuid, nullable=False),
            sa.Column("term", sa.String(50), nullable=False),
            sa.Column("year", sa.String(10), nullable=False),
            *score_columns(range(1, 5)),
            created_at(),
            updated_at(),
            sa.ForeignKeyConstraint(
                ["studentId"], ["students.id"], name="FK_record_books_student", ondelete="CASCADE"
            ),
            sa.ForeignKeyConstraint(
                ["teacherId"], ["teachers.id"], name="FK_record_books_teacher", ondelete="CASCADE"
            ),
            sa.ForeignKeyConstraint(
                ["classId"], ["classes.id"], name="FK_record_books_class", ondelete="CASCADE"
            ),
        )

    if not has_index("record_books", UNIQUE_INDEX):
        op.create_index(
            UNIQUE_INDEX,
            "record_books",
            ["studentId", "teacherId", "classId", "term", "year"],
            unique=True,
        )


def downgrade() -> None:
    op.drop_table("record_books")
