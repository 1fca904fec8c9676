"""Remove classid from classes.

Revision ID: 1700290000000
Revises: 1700280000000
"""

from app.migrations.helpers import add_classid_column, drop_classid_column

revision: int = 1700290000000
down_revision: int | None = 1700280000000
name = "RemoveClassidFromClasses"


def upgrade() -> None:
    drop_classid_column()


def downgrade() -> None:
    add_classid_column()
