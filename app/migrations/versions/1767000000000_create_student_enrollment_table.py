"""Create student_enrollments table.

Append-only history of a student's membership in classes.

Revision ID: 1767000000000
Revises: 1766000000000
"""

import sqlalchemy as sa
from alembic import op

from app.migrations.helpers import created_at, has_table, updated_at, uuid_pk

revision: int = 1767000000000
down_revision: int | None = 1766000000000
name = "CreateStudentEnrollmentTable"


def upgrade() -> None:
    if has_table("student_enrollments"):
        return
    op.create_table(
        "student_enrollments",
        uuid_pk(),
        sa.Column("studentId", sa.Uuid, nullable=False),
        sa.Column("classId", sa.Uuid, nullable=False),
        sa.Column("enrollmentDate", sa.Date, nullable=False),
        sa.Column("withdrawalDate", sa.Date, nullable=True),
        sa.Column("isActive", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("enrolledByUserId", sa.Uuid, nullable=False),
        sa.Column("withdrawnByUserId", sa.Uuid, nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        created_at(),
        updated_at(),
        sa.ForeignKeyConstraint(
            ["studentId"],
            ["students.id"],
            name="FK_student_enrollments_student",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["classId"], ["classes.id"], name="FK_student_enrollments_class", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["enrolledByUserId"],
            ["users.id"],
            name="FK_student_enrollments_enrolled_by",
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["withdrawnByUserId"],
            ["users.id"],
            name="FK_student_enrollments_withdrawn_by",
            ondelete="SET NULL",
        ),
    )
    op.create_index(
        "IDX_student_enrollments_student_date",
        "student_enrollments",
        ["studentId", "enrollmentDate"],
    )
    op.create_index("IDX_student_enrollments_class", "student_enrollments", ["classId"])
    op.create_index("IDX_student_enrollments_active", "student_enrollments", ["isActive"])


def downgrade() -> None:
    op.drop_table("student_enrollments")
