"""Re-assert nullable users.email with the partial unique index.

Safe to apply on databases where the previous email step already ran.

Revision ID: 1763891100027
Revises: 1763879209217
"""

from app.migrations.helpers import make_email_optional, make_email_required

revision: int = 1763891100027
down_revision: int | None = 1763879209217
name = "MakeEmailNullableAgain"


def upgrade() -> None:
    make_email_optional()


def downgrade() -> None:
    make_email_required()
