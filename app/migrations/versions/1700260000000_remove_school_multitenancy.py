"""Remove school multitenancy.

Drops the per-school indexes, the schoolId foreign keys and the schoolId
columns, returning to a single-tenant schema. The ``schools`` table stays.

This step cannot be reversed: the school assignment of every row is gone
once the columns are dropped.

Revision ID: 1700260000000
Revises: 1700250000000
"""

import logging

from alembic import op

from app.migrations.helpers import drop_index_if_exists, has_column, has_foreign_key
from app.migrations.runner import IrreversibleMigrationError

logger = logging.getLogger(__name__)

revision: int = 1700260000000
down_revision: int | None = 1700250000000
name = "RemoveSchoolMultitenancy"
reversible = False

# table -> per-school indexes created for it
TENANT_TABLES = {
    "users": ["IDX_users_email_school", "IDX_users_username_school"],
    "students": ["IDX_students_number_school"],
    "teachers": ["IDX_teachers_employee_school"],
    "parents": [],
    "classes": ["IDX_classes_name_school"],
    "subjects": ["IDX_subjects_code_school"],
    "exams": [],
    "marks": [],
    "invoices": [],
    "invoice_uniform_items": [],
    "uniform_items": ["IDX_uniform_items_name_school"],
    "settings": ["IDX_settings_school"],
    "attendance": [],
    "messages": [],
    "report_card_remarks": [],
}


def upgrade() -> None:
    """Drop indexes, then constraints, then columns."""
    for table, indexes in TENANT_TABLES.items():
        for index_name in indexes:
            drop_index_if_exists(table, index_name)

    for table in TENANT_TABLES:
        if not has_column(table, "schoolId"):
            logger.info("%s.schoolId already removed", table)
            continue
        constraint = f"FK_{table}_school"
        has_fk = has_foreign_key(table, constraint)
        with op.batch_alter_table(table) as batch_op:
            if has_fk:
                batch_op.drop_constraint(constraint, type_="foreignkey")
            batch_op.drop_column("schoolId")


def downgrade() -> None:
    raise IrreversibleMigrationError(
        revision,
        "Cannot revert removal of multitenancy. Use AddSchoolMultitenancy migration to restore.",
    )
