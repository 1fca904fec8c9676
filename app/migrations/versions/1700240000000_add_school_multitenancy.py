"""Add school multitenancy.

Creates the ``schools`` table, seeds a default school and partitions every
tenant-scoped table by a required ``schoolId`` foreign key.

Migration strategy (per table):
1. Add schoolId as nullable
2. Backfill existing rows with the default school id
3. Make schoolId NOT NULL
4. Add the foreign key to schools

Uniqueness that used to be global then gets a per-school index.

Revision ID: 1700240000000
Revises: 1700000000000
"""

import logging
import uuid

import sqlalchemy as sa
from alembic import op

from app.migrations.helpers import (
    created_at,
    drop_index_if_exists,
    has_column,
    has_foreign_key,
    has_index,
    has_table,
    updated_at,
    uuid_pk,
)

logger = logging.getLogger(__name__)

revision: int = 1700240000000
down_revision: int | None = 1700000000000
name = "AddSchoolMultitenancy"

DEFAULT_SCHOOL_CODE = "DEFAULT"
DEFAULT_SCHOOL_NAME = "Default School"

TENANT_TABLES = [
    "users",
    "students",
    "teachers",
    "parents",
    "classes",
    "subjects",
    "exams",
    "marks",
    "invoices",
    "invoice_uniform_items",
    "uniform_items",
    "settings",
    "attendance",
    "messages",
    "report_card_remarks",
]

# (index name, table, columns)
TENANT_INDEXES = [
    ("IDX_users_email_school", "users", ["email", "schoolId"]),
    ("IDX_users_username_school", "users", ["username", "schoolId"]),
    ("IDX_students_number_school", "students", ["studentNumber", "schoolId"]),
    ("IDX_teachers_employee_school", "teachers", ["employeeNumber", "schoolId"]),
    ("IDX_classes_name_school", "classes", ["name", "schoolId"]),
    ("IDX_subjects_code_school", "subjects", ["code", "schoolId"]),
    ("IDX_uniform_items_name_school", "uniform_items", ["name", "schoolId"]),
    ("IDX_settings_school", "settings", ["schoolId"]),
]

schools = sa.table(
    "schools",
    sa.column("id", sa.Uuid),
    sa.column("name", sa.String),
    sa.column("code", sa.String),
    sa.column("isActive", sa.Boolean),
)


def fk_name(table: str) -> str:
    return f"FK_{table}_school"


def _seed_default_school() -> uuid.UUID:
    bind = op.get_bind()
    school_id = bind.execute(
        sa.select(schools.c.id).where(schools.c.code == DEFAULT_SCHOOL_CODE)
    ).scalar_one_or_none()
    if school_id is not None:
        return school_id

    school_id = uuid.uuid4()
    bind.execute(
        sa.insert(schools).values(
            id=school_id,
            name=DEFAULT_SCHOOL_NAME,
            code=DEFAULT_SCHOOL_CODE,
            isActive=True,
        )
    )
    logger.info("Seeded default school %s", school_id)
    return school_id


def upgrade() -> None:
    """Partition tenant tables by school."""
    if not has_table("schools"):
        op.create_table(
            "schools",
            uuid_pk(),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("code", sa.String(50), nullable=False),
            sa.Column("logoUrl", sa.Text, nullable=True),
            sa.Column("address", sa.String(255), nullable=True),
            sa.Column("phone", sa.String(50), nullable=True),
            sa.Column("isActive", sa.Boolean, nullable=False, server_default=sa.true()),
            sa.Column("subscriptionEndDate", sa.DateTime, nullable=True),
            created_at(),
            updated_at(),
            sa.UniqueConstraint("code", name="UQ_schools_code"),
        )

    default_school_id = _seed_default_school()
    bind = op.get_bind()

    for table in TENANT_TABLES:
        if not has_column(table, "schoolId"):
            op.add_column(table, sa.Column("schoolId", sa.Uuid, nullable=True))

        target = sa.table(table, sa.column("schoolId", sa.Uuid))
        bind.execute(
            sa.update(target)
            .where(target.c.schoolId.is_(None))
            .values(schoolId=default_school_id)
        )

        with op.batch_alter_table(table) as batch_op:
            batch_op.alter_column("schoolId", existing_type=sa.Uuid, nullable=False)
            if not has_foreign_key(table, fk_name(table)):
                batch_op.create_foreign_key(fk_name(table), "schools", ["schoolId"], ["id"])

    for index_name, table, columns in TENANT_INDEXES:
        if not has_index(table, index_name):
            op.create_index(index_name, table, columns, unique=True)


def downgrade() -> None:
    """Remove the school partitioning and the schools table."""
    for index_name, table, _ in reversed(TENANT_INDEXES):
        drop_index_if_exists(table, index_name)

    for table in reversed(TENANT_TABLES):
        if not has_column(table, "schoolId"):
            continue
        has_fk = has_foreign_key(table, fk_name(table))
        with op.batch_alter_table(table) as batch_op:
            if has_fk:
                batch_op.drop_constraint(fk_name(table), type_="foreignkey")
            batch_op.drop_column("schoolId")

    if has_table("schools"):
        op.drop_table("schools")
