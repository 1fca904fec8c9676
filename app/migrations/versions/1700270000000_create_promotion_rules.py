"""Create promotion_rules table.

One rule per source class says which class its students move to at the
end of the year, or that the class is final. Default rules are seeded
for the classes that already exist; rules whose source class is missing
are skipped.

Revision ID: 1700270000000
Revises: 1700260000000
"""

import logging
import uuid

import sqlalchemy as sa
from alembic import op

from app.migrations.helpers import (
    created_at,
    drop_index_if_exists,
    has_index,
    has_table,
    updated_at,
    uuid_pk,
)

logger = logging.getLogger(__name__)

revision: int = 1700270000000
down_revision: int | None = 1700260000000
name = "CreatePromotionRules"

# (from class, to class, is final)
DEFAULT_RULES = [
    ("Stage 2", "Stage 3", False),
    ("ECD A", "ECD B", False),
    ("ECD B", "Stage 1A", False),
    ("Stage 1A", "Stage 1B", False),
    ("Stage 1B", "Stage 2", False),
    ("Stage 3", "Stage 4", False),
    ("Stage 4", "Stage 5", False),
    ("Stage 6", None, True),
]

classes = sa.table(
    "classes",
    sa.column("id", sa.Uuid),
    sa.column("name", sa.String),
    sa.column("form", sa.String),
)

promotion_rules = sa.table(
    "promotion_rules",
    sa.column("id", sa.Uuid),
    sa.column("fromClassId", sa.Uuid),
    sa.column("toClassId", sa.Uuid),
    sa.column("isFinalClass", sa.Boolean),
    sa.column("isActive", sa.Boolean),
)


def _find_class(label: str) -> uuid.UUID | None:
    return (
        op.get_bind()
        .execute(
            sa.select(classes.c.id)
            .where(sa.or_(classes.c.name == label, classes.c.form == label))
            .limit(1)
        )
        .scalar_one_or_none()
    )


def seed_default_rules() -> int:
    """Insert the default rules whose classes exist. Returns rules created."""
    bind = op.get_bind()
    created = 0
    for from_label, to_label, is_final in DEFAULT_RULES:
        target = to_label or "Completed"
        from_class_id = _find_class(from_label)
        if from_class_id is None:
            logger.info("Skipping rule %s -> %s: from class not found", from_label, target)
            continue

        to_class_id = None
        if to_label and not is_final:
            to_class_id = _find_class(to_label)
            if to_class_id is None:
                logger.warning("To class %r not found for rule %s -> %s", to_label, from_label, to_label)

        existing = bind.execute(
            sa.select(promotion_rules.c.id).where(promotion_rules.c.fromClassId == from_class_id)
        ).first()
        if existing:
            logger.info("Skipping rule %s -> %s: rule already exists", from_label, target)
            continue

        bind.execute(
            sa.insert(promotion_rules).values(
                id=uuid.uuid4(),
                fromClassId=from_class_id,
                toClassId=to_class_id,
                isFinalClass=is_final,
                isActive=True,
            )
        )
        created += 1
        logger.info("Created promotion rule: %s -> %s", from_label, target)
    return created


def upgrade() -> None:
    if not has_table("promotion_rules"):
        op.create_table(
            "promotion_rules",
            uuid_pk(),
            sa.Column("fromClassId", sa.Uuid, nullable=False),
            sa.Column("toClassId", sa.Uuid, nullable=True),
            sa.Column("isFinalClass", sa.Boolean, nullable=False, server_default=sa.false()),
            sa.Column("isActive", sa.Boolean, nullable=False, server_default=sa.true()),
            created_at(),
            updated_at(),
            sa.UniqueConstraint("fromClassId", name="UQ_promotion_rules_fromClassId"),
            sa.ForeignKeyConstraint(
                ["fromClassId"],
                ["classes.id"],
                name="FK_promotion_rules_fromClass",
                ondelete="CASCADE",
            ),
            sa.ForeignKeyConstraint(
                ["toClassId"],
                ["classes.id"],
                name="FK_promotion_rules_toClass",
                ondelete="SET NULL",
            ),
            sa.CheckConstraint(
                '"fromClassId" <> "toClassId"',
                name="CHK_promotion_rules_not_same_class",
            ),
        )

    if not has_index("promotion_rules", "IDX_promotion_rules_fromClassId"):
        op.create_index("IDX_promotion_rules_fromClassId", "promotion_rules", ["fromClassId"])
    if not has_index("promotion_rules", "IDX_promotion_rules_isActive"):
        op.create_index("IDX_promotion_rules_isActive", "promotion_rules", ["isActive"])

    seed_default_rules()


def downgrade() -> None:
    drop_index_if_exists("promotion_rules", "IDX_promotion_rules_isActive")
    drop_index_if_exists("promotion_rules", "IDX_promotion_rules_fromClassId")
    if has_table("promotion_rules"):
        op.drop_table("promotion_rules")
