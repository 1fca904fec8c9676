"""Make users.email nullable.

The unique index is rebuilt as a partial index so any number of users may
have no email.

Revision ID: 1735000000000
Revises: 1700470000000
"""

from app.migrations.helpers import make_email_optional, make_email_required

revision: int = 1735000000000
down_revision: int | None = 1700470000000
name = "MakeEmailNullable"


def upgrade() -> None:
    make_email_optional()


def downgrade() -> None:
    make_email_required()
