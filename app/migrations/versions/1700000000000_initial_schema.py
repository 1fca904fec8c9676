"""Initial schema.

Creates the single-tenant domain tables every later step builds on.
Role, status and type columns are plain strings validated by the
application.

Revision ID: 1700000000000
Revises: None
"""

import sqlalchemy as sa
from alembic import op

from app.migrations.helpers import created_at, updated_at, uuid_pk

revision: int = 1700000000000
down_revision: int | None = None
name = "InitialSchema"

TABLES = [
    "users",
    "parents",
    "classes",
    "teachers",
    "subjects",
    "students",
    "exams",
    "marks",
    "invoices",
    "uniform_items",
    "invoice_uniform_items",
    "settings",
    "attendance",
    "messages",
    "report_card_remarks",
]


def upgrade() -> None:
    """Create the baseline tables."""
    op.create_table(
        "users",
        uuid_pk(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("username", sa.String(255), nullable=True),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="student"),
        sa.Column("isActive", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("mustChangePassword", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("isTemporaryAccount", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("isDemo", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("studentId", sa.Uuid, nullable=True),
        sa.Column("teacherId", sa.Uuid, nullable=True),
        sa.Column("parentId", sa.Uuid, nullable=True),
        created_at(),
        sa.UniqueConstraint("username", name="UQ_users_username"),
    )
    op.create_index("IDX_users_email", "users", ["email"], unique=True)

    op.create_table(
        "parents",
        uuid_pk(),
        sa.Column("firstName", sa.String(255), nullable=False),
        sa.Column("lastName", sa.String(255), nullable=False),
        sa.Column("phoneNumber", sa.String(50), nullable=True),
        sa.Column("address", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("userId", sa.String(255), nullable=True),
    )

    op.create_table(
        "classes",
        uuid_pk(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("form", sa.String(255), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("isActive", sa.Boolean, nullable=False, server_default=sa.true()),
    )
    op.create_index("IDX_classes_name", "classes", ["name"], unique=True)

    op.create_table(
        "teachers",
        uuid_pk(),
        sa.Column("firstName", sa.String(255), nullable=False),
        sa.Column("lastName", sa.String(255), nullable=False),
        sa.Column("employeeNumber", sa.String(255), nullable=False),
        sa.Column("phoneNumber", sa.String(50), nullable=True),
        sa.Column("address", sa.String(255), nullable=True),
        sa.Column("dateOfBirth", sa.Date, nullable=True),
        sa.Column("isActive", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("userId", sa.String(255), nullable=True),
        sa.UniqueConstraint("employeeNumber", name="UQ_teachers_employeeNumber"),
    )

    op.create_table(
        "subjects",
        uuid_pk(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("code", sa.String(50), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("isActive", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.UniqueConstraint("code", name="UQ_subjects_code"),
    )

    op.create_table(
        "students",
        uuid_pk(),
        sa.Column("firstName", sa.String(255), nullable=False),
        sa.Column("lastName", sa.String(255), nullable=False),
        sa.Column("studentNumber", sa.String(50), nullable=False),
        sa.Column("dateOfBirth", sa.Date, nullable=False),
        sa.Column("gender", sa.String(20), nullable=False),
        sa.Column("address", sa.String(255), nullable=True),
        sa.Column("phoneNumber", sa.String(50), nullable=True),
        sa.Column("contactNumber", sa.String(50), nullable=True),
        sa.Column("studentType", sa.String(20), nullable=False, server_default="Day Scholar"),
        sa.Column("usesTransport", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("usesDiningHall", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("isStaffChild", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("photo", sa.String(255), nullable=True),
        sa.Column(
            "enrollmentDate",
            sa.DateTime,
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column("isActive", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("classId", sa.Uuid, nullable=True),
        sa.Column("userId", sa.String(255), nullable=True),
        sa.Column("parentId", sa.Uuid, nullable=True),
        sa.ForeignKeyConstraint(
            ["classId"], ["classes.id"], name="FK_students_class", ondelete="SET NULL"
        ),
        sa.ForeignKeyConstraint(
            ["parentId"], ["parents.id"], name="FK_students_parent", ondelete="SET NULL"
        ),
    )
    op.create_index("IDX_students_studentNumber", "students", ["studentNumber"], unique=True)

    op.create_table(
        "exams",
        uuid_pk(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("examDate", sa.Date, nullable=False),
        sa.Column("term", sa.String(50), nullable=True),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("classId", sa.Uuid, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        created_at(),
        sa.ForeignKeyConstraint(
            ["classId"], ["classes.id"], name="FK_exams_class", ondelete="CASCADE"
        ),
    )

    op.create_table(
        "marks",
        uuid_pk(),
        sa.Column("studentId", sa.Uuid, nullable=False),
        sa.Column("examId", sa.Uuid, nullable=False),
        sa.Column("subjectId", sa.Uuid, nullable=False),
        sa.Column("score", sa.Numeric(5, 2), nullable=False),
        sa.Column("maxScore", sa.Numeric(5, 2), nullable=False),
        sa.Column("comments", sa.Text, nullable=True),
        created_at(),
        updated_at(),
        sa.ForeignKeyConstraint(
            ["studentId"], ["students.id"], name="FK_marks_student", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["examId"], ["exams.id"], name="FK_marks_exam", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["subjectId"], ["subjects.id"], name="FK_marks_subject", ondelete="CASCADE"
        ),
    )

    op.create_table(
        "invoices",
        uuid_pk(),
        sa.Column("invoiceNumber", sa.String(50), nullable=False),
        sa.Column("studentId", sa.Uuid, nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("paidAmount", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("balance", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("previousBalance", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("prepaidAmount", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("uniformTotal", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("dueDate", sa.Date, nullable=False),
        sa.Column("term", sa.String(50), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        created_at(),
        updated_at(),
        sa.UniqueConstraint("invoiceNumber", name="UQ_invoices_invoiceNumber"),
        sa.ForeignKeyConstraint(
            ["studentId"], ["students.id"], name="FK_invoices_student", ondelete="CASCADE"
        ),
    )

    op.create_table(
        "uniform_items",
        uuid_pk(),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("unitPrice", sa.Numeric(10, 2), nullable=False),
        sa.Column("isActive", sa.Boolean, nullable=False, server_default=sa.true()),
        created_at(),
        updated_at(),
        sa.UniqueConstraint("name", name="UQ_uniform_items_name"),
    )

    op.create_table(
        "invoice_uniform_items",
        uuid_pk(),
        sa.Column("invoiceId", sa.Uuid, nullable=False),
        sa.Column("uniformItemId", sa.Uuid, nullable=True),
        sa.Column("itemName", sa.String(150), nullable=False),
        sa.Column("unitPrice", sa.Numeric(10, 2), nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("lineTotal", sa.Numeric(10, 2), nullable=False),
        created_at(),
        updated_at(),
        sa.ForeignKeyConstraint(
            ["invoiceId"],
            ["invoices.id"],
            name="FK_invoice_uniform_items_invoice",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["uniformItemId"],
            ["uniform_items.id"],
            name="FK_invoice_uniform_items_item",
            ondelete="SET NULL",
        ),
    )

    op.create_table(
        "settings",
        uuid_pk(),
        sa.Column("studentIdPrefix", sa.String(20), nullable=False, server_default="JPS"),
        sa.Column("feesSettings", sa.JSON, nullable=True),
        sa.Column("gradeThresholds", sa.JSON, nullable=True),
        sa.Column("gradeLabels", sa.JSON, nullable=True),
        sa.Column("schoolLogo", sa.Text, nullable=True),
        sa.Column("schoolName", sa.Text, nullable=True),
        sa.Column("schoolAddress", sa.Text, nullable=True),
        sa.Column("schoolPhone", sa.String(50), nullable=True),
        sa.Column("schoolEmail", sa.String(255), nullable=True),
        sa.Column("headmasterName", sa.String(255), nullable=True),
        sa.Column("academicYear", sa.String(50), nullable=True),
        sa.Column("currentTerm", sa.String(50), nullable=True),
        sa.Column("activeTerm", sa.String(50), nullable=True),
        sa.Column("termStartDate", sa.Date, nullable=True),
        sa.Column("termEndDate", sa.Date, nullable=True),
        sa.Column("currencySymbol", sa.String(10), nullable=False, server_default="KES"),
        sa.Column("moduleAccess", sa.JSON, nullable=True),
        sa.Column("promotionRules", sa.JSON, nullable=True),
        created_at(),
        updated_at(),
    )

    op.create_table(
        "attendance",
        uuid_pk(),
        sa.Column("studentId", sa.Uuid, nullable=False),
        sa.Column("classId", sa.Uuid, nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="present"),
        sa.Column("term", sa.String(50), nullable=True),
        sa.Column("remarks", sa.Text, nullable=True),
        sa.Column("markedBy", sa.Uuid, nullable=True),
        created_at(),
        updated_at(),
        sa.ForeignKeyConstraint(
            ["studentId"], ["students.id"], name="FK_attendance_student", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["classId"], ["classes.id"], name="FK_attendance_class", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["markedBy"], ["users.id"], name="FK_attendance_marked_by", ondelete="SET NULL"
        ),
    )

    op.create_table(
        "messages",
        uuid_pk(),
        sa.Column("subject", sa.String(255), nullable=False),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("recipients", sa.String(50), nullable=False),
        sa.Column("senderId", sa.Uuid, nullable=True),
        sa.Column("senderName", sa.String(255), nullable=True),
        sa.Column("parentId", sa.Uuid, nullable=True),
        sa.Column("isRead", sa.Boolean, nullable=False, server_default=sa.false()),
        created_at(),
        sa.ForeignKeyConstraint(
            ["senderId"], ["users.id"], name="FK_messages_sender", ondelete="SET NULL"
        ),
        sa.ForeignKeyConstraint(
            ["parentId"], ["parents.id"], name="FK_messages_parent", ondelete="CASCADE"
        ),
    )

    op.create_table(
        "report_card_remarks",
        uuid_pk(),
        sa.Column("studentId", sa.Uuid, nullable=False),
        sa.Column("classId", sa.Uuid, nullable=False),
        sa.Column("examType", sa.String(50), nullable=False),
        sa.Column("classTeacherRemarks", sa.Text, nullable=True),
        sa.Column("headmasterRemarks", sa.Text, nullable=True),
        sa.Column("classTeacherId", sa.Uuid, nullable=True),
        sa.Column("headmasterId", sa.Uuid, nullable=True),
        created_at(),
        updated_at(),
        sa.ForeignKeyConstraint(
            ["studentId"],
            ["students.id"],
            name="FK_report_card_remarks_student",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["classId"], ["classes.id"], name="FK_report_card_remarks_class", ondelete="CASCADE"
        ),
    )


def downgrade() -> None:
    """Drop the baseline tables, dependents first."""
    op.drop_index("IDX_students_studentNumber", table_name="students")
    op.drop_index("IDX_classes_name", table_name="classes")
    op.drop_index("IDX_users_email", table_name="users")
    for table in reversed(TABLES):
        op.drop_table(table)
