"""Create student_transfers table.

Append-only history of students moving between classes (internal) or
leaving the school (external). The processing user is kept for audit, so
that user cannot be deleted while transfers reference them.

Revision ID: 1766000000000
Revises: 1765000000000
"""

import sqlalchemy as sa
from alembic import op

from app.migrations.helpers import has_table, uuid_pk

revision: int = 1766000000000
down_revision: int | None = 1765000000000
name = "CreateStudentTransferTable"

transfer_type = sa.Enum("internal", "external", name="student_transfers_transfertype_enum")


def upgrade() -> None:
    if has_table("student_transfers"):
        return
    op.create_table(
        "student_transfers",
        uuid_pk(),
        sa.Column("studentId", sa.Uuid, nullable=False),
        sa.Column("transferType", transfer_type, nullable=False, server_default="internal"),
        sa.Column("previousClassId", sa.Uuid, nullable=True),
        sa.Column("newClassId", sa.Uuid, nullable=True),
        sa.Column("destinationSchool", sa.String(255), nullable=True),
        sa.Column("reason", sa.Text, nullable=True),
        sa.Column("transferDate", sa.Date, nullable=False),
        sa.Column("effectiveDate", sa.Date, nullable=True),
        sa.Column("processedByUserId", sa.Uuid, nullable=False),
        sa.Column(
            "createdAt", sa.DateTime, nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")
        ),
        sa.Column("notes", sa.Text, nullable=True),
        sa.ForeignKeyConstraint(
            ["studentId"], ["students.id"], name="FK_student_transfers_student", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["previousClassId"],
            ["classes.id"],
            name="FK_student_transfers_previous_class",
            ondelete="SET NULL",
        ),
        sa.ForeignKeyConstraint(
            ["newClassId"],
            ["classes.id"],
            name="FK_student_transfers_new_class",
            ondelete="SET NULL",
        ),
        sa.ForeignKeyConstraint(
            ["processedByUserId"],
            ["users.id"],
            name="FK_student_transfers_processed_by",
            ondelete="RESTRICT",
        ),
    )
    op.create_index(
        "IDX_student_transfers_student_date", "student_transfers", ["studentId", "transferDate"]
    )
    op.create_index("IDX_student_transfers_type", "student_transfers", ["transferType"])
    op.create_index("IDX_student_transfers_date", "student_transfers", ["transferDate"])


def downgrade() -> None:
    op.drop_table("student_transfers")
    transfer_type.drop(op.get_bind(), checkfirst=True)
