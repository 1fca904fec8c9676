"""Create teacher_classes junction table.

A teacher is assigned to a class at most once.

Revision ID: 1764000000000
Revises: 1763891100027
"""

import sqlalchemy as sa
from alembic import op

from app.migrations.helpers import has_table, uuid_pk

revision: int = 1764000000000
down_revision: int | None = 1763891100027
name = "CreateTeacherClassesJunctionTable"


def upgrade() -> None:
    if has_table("teacher_classes"):
        return
    op.create_table(
        "teacher_classes",
        uuid_pk(),
        sa.Column("teacherId", sa.Uuid, nullable=False),
        sa.Column("classId", sa.Uuid, nullable=False),
        sa.UniqueConstraint("teacherId", "classId", name="UQ_teacher_classes_teacher_class"),
        sa.ForeignKeyConstraint(
            ["teacherId"], ["teachers.id"], name="FK_teacher_classes_teacher", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["classId"], ["classes.id"], name="FK_teacher_classes_class", ondelete="CASCADE"
        ),
    )
    op.create_index("IDX_teacher_classes_teacherId", "teacher_classes", ["teacherId"])
    op.create_index("IDX_teacher_classes_classId", "teacher_classes", ["classId"])


def downgrade() -> None:
    op.drop_index("IDX_teacher_classes_classId", table_name="teacher_classes")
    op.drop_index("IDX_teacher_classes_teacherId", table_name="teacher_classes")
    op.drop_table("teacher_classes")
