"""Schema inspection helpers shared by migration steps.

Every check inspects the live schema through a fresh inspector, so a step
can be re-run against a partially applied database.
"""

import re

import sqlalchemy as sa
from alembic import op


def _inspector() -> sa.engine.reflection.Inspector:
    return sa.inspect(op.get_bind())


def is_postgresql() -> bool:
    return op.get_bind().dialect.name == "postgresql"


def has_table(table: str) -> bool:
    return _inspector().has_table(table)


def has_column(table: str, column: str) -> bool:
    if not has_table(table):
        return False
    return any(c["name"] == column for c in _inspector().get_columns(table))


def get_column(table: str, column: str) -> dict | None:
    for c in _inspector().get_columns(table):
        if c["name"] == column:
            return c
    return None


def has_index(table: str, name: str) -> bool:
    if not has_table(table):
        return False
    return any(ix["name"] == name for ix in _inspector().get_indexes(table))


def has_unique_constraint(table: str, name: str) -> bool:
    if not has_table(table):
        return False
    return any(uq["name"] == name for uq in _inspector().get_unique_constraints(table))


def has_foreign_key(table: str, name: str) -> bool:
    if not has_table(table):
        return False
    return any(fk["name"] == name for fk in _inspector().get_foreign_keys(table))


def uuid_pk() -> sa.Column:
    """UUID primary key column; PostgreSQL also generates ids server side."""
    kwargs = {}
    if is_postgresql():
        kwargs["server_default"] = sa.text("gen_random_uuid()")
    return sa.Column("id", sa.Uuid, primary_key=True, **kwargs)


def created_at() -> sa.Column:
    return sa.Column(
        "createdAt", sa.DateTime, nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")
    )


def updated_at() -> sa.Column:
    return sa.Column(
        "updatedAt", sa.DateTime, nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")
    )


def drop_index_if_exists(table: str, name: str) -> bool:
    if has_index(table, name):
        op.drop_index(name, table_name=table)
        return True
    return False


def class_identifier(name: str | None, form: str | None, class_id) -> str:
    """Uppercase alphanumeric identifier derived from a class name or form."""
    source = name or form or f"CLASS{class_id}"
    return re.sub(r"[^A-Z0-9]", "", source.upper())


def assign_class_identifiers(rows: list[tuple]) -> dict:
    """Map class id -> unique identifier for rows of (id, name, form).

    Duplicates keep the first identifier (ordered by id) and get a numeric
    suffix from 2 upwards.
    """
    by_base: dict[str, list] = {}
    for class_id, name, form in sorted(rows, key=lambda r: str(r[0])):
        by_base.setdefault(class_identifier(name, form, class_id), []).append(class_id)

    assigned = {}
    for base, ids in by_base.items():
        for position, class_id in enumerate(ids, start=1):
            assigned[class_id] = base if position == 1 else f"{base}{position}"
    return assigned


def add_classid_column() -> None:
    """Add classes.classid, backfill it, then make it unique and required."""
    if not has_column("classes", "classid"):
        op.add_column("classes", sa.Column("classid", sa.String(50), nullable=True))

    bind = op.get_bind()
    classes = sa.table(
        "classes",
        sa.column("id", sa.Uuid),
        sa.column("name", sa.String),
        sa.column("form", sa.String),
        sa.column("classid", sa.String),
    )
    rows = bind.execute(
        sa.select(classes.c.id, classes.c.name, classes.c.form).where(classes.c.classid.is_(None))
    ).all()
    for class_id, identifier in assign_class_identifiers([tuple(r) for r in rows]).items():
        bind.execute(
            sa.update(classes).where(classes.c.id == class_id).values(classid=identifier)
        )

    if not has_index("classes", "UQ_classes_classid"):
        op.create_index("UQ_classes_classid", "classes", ["classid"], unique=True)

    with op.batch_alter_table("classes") as batch_op:
        batch_op.alter_column("classid", existing_type=sa.String(50), nullable=False)


def drop_classid_column() -> None:
    drop_index_if_exists("classes", "UQ_classes_classid")
    if has_column("classes", "classid"):
        with op.batch_alter_table("classes") as batch_op:
            batch_op.drop_column("classid")


def _email_index(partial: bool) -> None:
    kwargs = {}
    if partial:
        email_present = sa.column("email").is_not(None)
        kwargs = {"postgresql_where": email_present, "sqlite_where": email_present}
    op.create_index("IDX_users_email", "users", ["email"], unique=True, **kwargs)


def make_email_optional() -> None:
    """Make users.email nullable, unique only among rows that have one."""
    drop_index_if_exists("users", "IDX_users_email")
    with op.batch_alter_table("users") as batch_op:
        batch_op.alter_column("email", existing_type=sa.String(255), nullable=True)
    _email_index(partial=True)


def make_email_required() -> None:
    """Restore a required, globally unique users.email. Fails on NULL emails."""
    drop_index_if_exists("users", "IDX_users_email")
    with op.batch_alter_table("users") as batch_op:
        batch_op.alter_column("email", existing_type=sa.String(255), nullable=False)
    _email_index(partial=False)
