"""CLI commands for management tasks."""

import asyncio
import logging
import sys

from sqlalchemy import select

from app.core.config import settings
from app.core.database import async_session_maker, engine
from app.core.permissions import Role
from app.migrations.runner import IrreversibleMigrationError, MigrationError, MigrationRunner
from app.models.user import User
from app.services.auth import create_user

USAGE = """Usage: python -m app.cli <command>
Commands:
  migrate [target]                 Apply pending migrations (up to target)
  rollback [n]                     Revert the last n migrations (default 1)
  status                           Show applied and pending migrations
  reapply <revision>               Re-run an applied, resumable migration
  create-admin <username> <password> [email]"""


async def migrate(target: int | None = None) -> None:
    """Apply pending migrations."""
    runner = MigrationRunner(engine)
    try:
        applied = await runner.upgrade(target)
    finally:
        await engine.dispose()

    if applied:
        print(f"✓ Applied {len(applied)} migration(s)")
    else:
        print("Database is up to date")


async def rollback(steps: int = 1) -> None:
    """Revert the most recent migrations."""
    runner = MigrationRunner(engine)
    try:
        reverted = await runner.downgrade(steps=steps)
    finally:
        await engine.dispose()

    print(f"✓ Reverted {len(reverted)} migration(s)")


async def show_status() -> None:
    """Print the migration ledger state."""
    runner = MigrationRunner(engine)
    try:
        state = await runner.status()
    finally:
        await engine.dispose()

    names = {step.revision: step.name for step in runner.steps}
    print(f"Current: {state['current']}  Head: {state['head']}")
    for revision in state["applied"]:
        print(f"  [x] {revision} {names.get(revision, '?')}")
    for revision in state["pending"]:
        print(f"  [ ] {revision} {names[revision]}")


async def reapply(revision: int) -> None:
    """Re-run a partially applied migration."""
    runner = MigrationRunner(engine)
    try:
        await runner.reapply(revision)
    finally:
        await engine.dispose()

    print(f"✓ Reapplied {revision}")


async def create_admin(username: str, password: str, email: str | None = None) -> None:
    """Create a school administrator account."""
    async with async_session_maker() as db:
        result = await db.execute(select(User).where(User.username == username))
        if result.scalar_one_or_none():
            print(f"Error: Username {username} is already taken!")
            sys.exit(1)

        admin = await create_user(db, username, password, Role.ADMIN, email=email)

        print("✓ Admin created successfully!")
        print(f"  ID: {admin.id}")
        print(f"  Username: {admin.username}")

    await engine.dispose()


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if len(sys.argv) < 2:
        print(USAGE)
        sys.exit(1)

    command, args = sys.argv[1], sys.argv[2:]

    try:
        if command == "migrate":
            target = int(args[0]) if args else None
            asyncio.run(migrate(target))
        elif command == "rollback":
            steps = int(args[0]) if args else 1
            asyncio.run(rollback(steps))
        elif command == "status":
            asyncio.run(show_status())
        elif command == "reapply" and len(args) == 1:
            asyncio.run(reapply(int(args[0])))
        elif command == "create-admin":
            if len(args) not in (2, 3):
                print("Usage: python -m app.cli create-admin <username> <password> [email]")
                sys.exit(1)
            asyncio.run(create_admin(*args))
        else:
            print(f"Unknown command: {command}")
            print(USAGE)
            sys.exit(1)
    except (MigrationError, IrreversibleMigrationError, KeyError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
