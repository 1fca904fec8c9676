"""Add subjectId to record_books.

Record book rows become subject specific. Rows without a subject cannot be
attributed and are deleted; this loss is permanent.

The step resumes after a partial earlier run: every sub-change checks the
live schema first.

Revision ID: 1700470000000
Revises: 1700460000000
"""

import logging

import sqlalchemy as sa
from alembic import op

from app.migrations.helpers import (
    drop_index_if_exists,
    get_column,
    has_column,
    has_foreign_key,
    has_index,
    is_postgresql,
)

logger = logging.getLogger(__name__)

revision: int = 1700470000000
down_revision: int | None = 1700460000000
name = "AddSubjectIdToRecordBook"

OLD_UNIQUE_INDEXES = (
    "IDX_RECORD_BOOK_UNIQUE",
    "IDX_record_books_studentId_teacherId_classId_term_year",
)
NEW_UNIQUE_INDEX = "IDX_record_books_studentId_teacherId_classId_subjectId_term_year"
SUBJECT_FK = "FK_record_books_subject"

record_books = sa.table("record_books", sa.column("subjectId", sa.Uuid))


def delete_rows_without_subject() -> int:
    """Delete rows lacking a subject; a missing column is not an error."""
    bind = op.get_bind()
    statement = sa.delete(record_books).where(record_books.c.subjectId.is_(None))
    try:
        if is_postgresql():
            # A failed statement aborts the whole transaction on PostgreSQL
            with bind.begin_nested():
                result = bind.execute(statement)
        else:
            result = bind.execute(statement)
    except sa.exc.DBAPIError as e:
        if "subjectId" not in str(e.orig):
            raise
        logger.warning("No records to clean up, subjectId column missing: %s", e.orig)
        return 0

    logger.info("Cleaned up %s record book rows without subjectId", result.rowcount)
    return result.rowcount


def upgrade() -> None:
    for index_name in OLD_UNIQUE_INDEXES:
        if drop_index_if_exists("record_books", index_name):
            logger.info("Dropped old unique index %s", index_name)

    if not has_column("record_books", "subjectId"):
        op.add_column("record_books", sa.Column("subjectId", sa.Uuid, nullable=True))
    else:
        logger.info("subjectId column already exists, continuing from partial migration")

    delete_rows_without_subject()

    needs_fk = not has_foreign_key("record_books", SUBJECT_FK)
    column = get_column("record_books", "subjectId")
    needs_not_null = column is not None and column["nullable"]

    if needs_fk or needs_not_null:
        with op.batch_alter_table("record_books") as batch_op:
            if needs_not_null:
                batch_op.alter_column("subjectId", existing_type=sa.Uuid, nullable=False)
            if needs_fk:
                batch_op.create_foreign_key(
                    SUBJECT_FK, "subjects", ["subjectId"], ["id"], ondelete="CASCADE"
                )
    else:
        logger.info("subjectId foreign key and NOT NULL already in place")

    if not has_index("record_books", NEW_UNIQUE_INDEX):
        op.create_index(
            NEW_UNIQUE_INDEX,
            "record_books",
            ["studentId", "teacherId", "classId", "subjectId", "term", "year"],
            unique=True,
        )
    else:
        logger.info("Unique index %s already exists", NEW_UNIQUE_INDEX)


def downgrade() -> None:
    drop_index_if_exists("record_books", NEW_UNIQUE_INDEX)

    if has_column("record_books", "subjectId"):
        has_fk = has_foreign_key("record_books", SUBJECT_FK)
        with op.batch_alter_table("record_books") as batch_op:
            if has_fk:
                batch_op.drop_constraint(SUBJECT_FK, type_="foreignkey")
            batch_op.drop_column("subjectId")

    if not has_index("record_books", OLD_UNIQUE_INDEXES[0]):
        op.create_index(
            OLD_UNIQUE_INDEXES[0],
            "record_books",
            ["studentId", "teacherId", "classId", "term", "year"],
            unique=True,
        )
