"""Add classid to classes.

Each class gets an uppercase alphanumeric identifier derived from its name
(or form). Duplicates get a numeric suffix before the unique index and
NOT NULL constraint are applied.

Revision ID: 1700280000000
Revises: 1700270000000
"""

from app.migrations.helpers import add_classid_column, drop_classid_column

revision: int = 1700280000000
down_revision: int | None = 1700270000000
name = "AddClassidToClasses"


def upgrade() -> None:
    add_classid_column()


def downgrade() -> None:
    drop_classid_column()
