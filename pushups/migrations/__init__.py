"""
Ordered schema migrations. NEVER modify or reorder existing steps; only append.

The position of a step in MIGRATIONS is its version number minus one.
"""

from datetime import date

from sqlalchemy.engine import Engine

from pushups.core.migrations import MigrationStep, run_migrations
from pushups.migrations import (
    v0001_create_users,
    v0002_create_pushup_entries,
    v0003_create_settings,
    v0004_add_rabbit_columns,
)

MIGRATIONS: tuple[MigrationStep, ...] = (
    MigrationStep("create users table", v0001_create_users.upgrade),
    MigrationStep("create pushup_entries table", v0002_create_pushup_entries.upgrade),
    MigrationStep(
        "create settings table",
        v0003_create_settings.upgrade,
        seed=v0003_create_settings.seed,
    ),
    MigrationStep("add rabbit columns to users", v0004_add_rabbit_columns.upgrade),
)

LATEST_VERSION = len(MIGRATIONS)


def migrate(engine: Engine, today: date | None = None) -> int:
    """Apply all pending migrations to engine's store; returns the number applied."""
    return run_migrations(engine, MIGRATIONS, today=today)


__all__ = ["LATEST_VERSION", "MIGRATIONS", "migrate"]
