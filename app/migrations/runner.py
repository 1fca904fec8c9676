"""Schema migration runner.

Applies the ordered migration steps under ``app/migrations/versions``
programmatically, without the alembic CLI. Every step runs in its own
transaction together with its ledger row, so a failed step leaves the
earlier steps committed and the failed one unrecorded.

Example:
    from app.core.database import engine
    from app.migrations.runner import MigrationRunner

    runner = MigrationRunner(engine)
    await runner.upgrade()
"""

import importlib
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from types import ModuleType
from typing import Any, Callable

import sqlalchemy as sa
from alembic.operations import Operations
from alembic.runtime.migration import MigrationContext
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine

from app.core.config import settings

logger = logging.getLogger(__name__)

VERSIONS_PACKAGE = "app.migrations.versions"

# Migration files in order (must be maintained manually)
MIGRATIONS = [
    "1700000000000_initial_schema",
    "1700240000000_add_school_multitenancy",
    "1700250000000_rename_code_to_schoolid",
    "1700260000000_remove_school_multitenancy",
    "1700270000000_create_promotion_rules",
    "1700280000000_add_classid_to_classes",
    "1700290000000_remove_classid_from_classes",
    "1700300000000_create_schools_table",
    "1700400000000_create_record_book_table",
    "1700410000000_add_more_tests_to_record_book",
    "1700420000000_rename_employee_number_to_teacher_id",
    "1700430000000_change_user_id_to_uuid",
    "1700440000000_add_test_dates_to_record_book",
    "1700450000000_change_test_marks_to_integer",
    "1700460000000_add_default_module_access",
    "1700470000000_add_subject_id_to_record_book",
    "1735000000000_make_email_nullable",
    "1763879209217_add_school_motto",
    "1763891100027_make_email_nullable_again",
    "1764000000000_create_teacher_classes_junction_table",
    "1765000000000_add_subject_category_column",
    "1766000000000_create_student_transfer_table",
    "1767000000000_create_student_enrollment_table",
    "1768000000000_add_uniform_mark_to_marks",
    "1769000000000_create_timetable_tables",
]


class MigrationError(Exception):
    """A migration step failed; the step was not recorded."""

    def __init__(self, revision: int, name: str, message: str) -> None:
        super().__init__(f"Migration {revision} ({name}) failed: {message}")
        self.revision = revision
        self.name = name


class IrreversibleMigrationError(Exception):
    """Raised when reversing a step that declares itself irreversible."""

    def __init__(self, revision: int, message: str) -> None:
        super().__init__(message)
        self.revision = revision
        self.message = message


@dataclass(frozen=True)
class MigrationStep:
    """One entry of the migration ledger."""

    revision: int
    name: str
    module: ModuleType
    reversible: bool = True

    def upgrade(self) -> None:
        self.module.upgrade()

    def downgrade(self) -> None:
        self.module.downgrade()


def load_steps(module_names: list[str] | None = None) -> list[MigrationStep]:
    """Import the migration modules and return them as ordered steps.

    Raises:
        ValueError: If a module lacks upgrade/downgrade or revisions are
            not strictly increasing.
    """
    steps: list[MigrationStep] = []
    for module_name in module_names or MIGRATIONS:
        try:
            module = importlib.import_module(f"{VERSIONS_PACKAGE}.{module_name}")
        except ImportError as e:
            raise ImportError(f"Cannot import migration {module_name}: {e}") from e

        for fn_name in ("upgrade", "downgrade"):
            if not callable(getattr(module, fn_name, None)):
                raise ValueError(f"Migration {module_name} has no {fn_name}() function")

        steps.append(
            MigrationStep(
                revision=int(module.revision),
                name=module.name,
                module=module,
                reversible=getattr(module, "reversible", True),
            )
        )

    for previous, current in zip(steps, steps[1:]):
        if current.revision <= previous.revision:
            raise ValueError(
                f"Migration revisions must strictly increase: "
                f"{current.revision} ({current.name}) follows {previous.revision} ({previous.name})"
            )

    return steps


def _ledger_table(metadata: sa.MetaData | None = None) -> sa.Table:
    return sa.Table(
        settings.MIGRATIONS_TABLE,
        metadata or sa.MetaData(),
        sa.Column("revision", sa.BigInteger, primary_key=True, autoincrement=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("applied_at", sa.DateTime, nullable=False),
    )


def _run_step_sync(connection: Connection, step_fn: Callable[[], None]) -> None:
    """Run an upgrade/downgrade function with the alembic ``op`` proxy bound.

    Alembic operations are sync and resolve ``op`` through a module-level
    proxy, so the step runs inside ``Operations.context``.
    """
    context = MigrationContext.configure(connection)
    with Operations.context(context):
        step_fn()


class MigrationRunner:
    """Applies and reverses migration steps against one database."""

    def __init__(self, engine: AsyncEngine, steps: list[MigrationStep] | None = None) -> None:
        self.engine = engine
        self.steps = steps if steps is not None else load_steps()
        self.ledger = _ledger_table()

    @property
    def head(self) -> int | None:
        return self.steps[-1].revision if self.steps else None

    async def _ensure_ledger(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(self.ledger.create, checkfirst=True)

    async def applied(self) -> list[int]:
        """Revisions recorded in the ledger, ascending."""
        await self._ensure_ledger()
        async with self.engine.connect() as conn:
            result = await conn.execute(
                sa.select(self.ledger.c.revision).order_by(self.ledger.c.revision)
            )
            return [row[0] for row in result]

    async def pending(self) -> list[MigrationStep]:
        """Steps not yet recorded in the ledger, ascending."""
        applied = set(await self.applied())
        return [step for step in self.steps if step.revision not in applied]

    async def status(self) -> dict[str, Any]:
        applied = await self.applied()
        applied_set = set(applied)
        return {
            "applied": applied,
            "pending": [s.revision for s in self.steps if s.revision not in applied_set],
            "current": applied[-1] if applied else None,
            "head": self.head,
        }

    async def upgrade(self, target: int | None = None) -> list[int]:
        """Apply pending steps up to and including ``target`` (default: head).

        Returns:
            List of applied revisions.

        Raises:
            MigrationError: If a step fails. Later steps are not attempted.
        """
        applied = await self.applied()
        logger.info("Current migration revision: %s", applied[-1] if applied else "None")

        applied_set = set(applied)
        to_apply = [
            step
            for step in self.steps
            if step.revision not in applied_set and (target is None or step.revision <= target)
        ]

        if not to_apply:
            logger.info("No pending migrations")
            return []

        # A step may only run once every earlier step has run
        first = to_apply[0]
        missing = [
            s.revision for s in self.steps if s.revision < first.revision and s.revision not in applied_set
        ]
        if missing:
            raise MigrationError(first.revision, first.name, f"earlier revisions not applied: {missing}")

        logger.info(
            "Applying %d migrations: %s",
            len(to_apply),
            ", ".join(str(s.revision) for s in to_apply),
        )

        done = []
        for step in to_apply:
            await self._apply(step)
            done.append(step.revision)
            logger.info("Applied migration: %s %s", step.revision, step.name)

        return done

    async def _apply(self, step: MigrationStep) -> None:
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(_run_step_sync, step.upgrade)
                await conn.execute(
                    sa.insert(self.ledger).values(
                        revision=step.revision,
                        name=step.name,
                        applied_at=datetime.now(timezone.utc).replace(tzinfo=None),
                    )
                )
        except Exception as e:
            logger.error("Migration %s %s failed: %s", step.revision, step.name, e)
            raise MigrationError(step.revision, step.name, str(e)) from e

    def get_step(self, revision: int) -> MigrationStep:
        for step in self.steps:
            if step.revision == revision:
                return step
        raise KeyError(f"Unknown migration revision: {revision}")

    async def reapply(self, revision: int) -> None:
        """Run an applied step's upgrade again, leaving the ledger as is.

        Used to finish a step that was partially applied outside the
        runner. Only steps that guard every change are safe to reapply.

        Raises:
            MigrationError: If the step is not applied yet or fails.
        """
        step = self.get_step(revision)
        if revision not in await self.applied():
            raise MigrationError(revision, step.name, "not applied yet, use upgrade()")

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(_run_step_sync, step.upgrade)
        except Exception as e:
            logger.error("Reapplying migration %s %s failed: %s", step.revision, step.name, e)
            raise MigrationError(step.revision, step.name, str(e)) from e
        logger.info("Reapplied migration: %s %s", step.revision, step.name)

    async def downgrade(self, target: int | None = None, steps: int = 1) -> list[int]:
        """Reverse applied steps, newest first.

        With ``target`` set, every applied step above ``target`` is reversed;
        otherwise the last ``steps`` applied steps are.

        Raises:
            IrreversibleMigrationError: If any step in range cannot be
                reversed. Nothing is reversed in that case.
            MigrationError: If a reverse transform fails.
        """
        applied = set(await self.applied())
        applied_steps = [s for s in reversed(self.steps) if s.revision in applied]

        if target is not None:
            to_reverse = [s for s in applied_steps if s.revision > target]
        else:
            to_reverse = applied_steps[:steps]

        if not to_reverse:
            logger.info("Nothing to downgrade")
            return []

        for step in to_reverse:
            if not step.reversible:
                # The declared reverse transform raises its own explanation
                step.downgrade()
                raise IrreversibleMigrationError(
                    step.revision, f"Migration {step.revision} ({step.name}) is irreversible"
                )

        reverted = []
        for step in to_reverse:
            try:
                async with self.engine.begin() as conn:
                    await conn.run_sync(_run_step_sync, step.downgrade)
                    await conn.execute(
                        sa.delete(self.ledger).where(self.ledger.c.revision == step.revision)
                    )
            except Exception as e:
                logger.error("Reverting migration %s %s failed: %s", step.revision, step.name, e)
                raise MigrationError(step.revision, step.name, str(e)) from e
            reverted.append(step.revision)
            logger.info("Reverted migration: %s %s", step.revision, step.name)

        return reverted
