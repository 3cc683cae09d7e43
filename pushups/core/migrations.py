"""
Schema migrator: applies an ordered, append-only list of steps to a SQLite store.

The store records how many steps have been applied in ``PRAGMA user_version``.
The version is a positional index into the step list, so existing steps must
never be edited or reordered; new schema changes are appended.

Each step runs in its own transaction together with its optional seed action
and the version stamp, so a failing step leaves the store at the previous
version and the run can be retried.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timezone

from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy.engine import Connection, Engine

from pushups.core.database import TRANSACTIONAL_DDL

logger = logging.getLogger(__name__)

UpgradeFn = Callable[[Operations], None]
SeedFn = Callable[[Connection, date], None]


class MigrationError(Exception):
    """Raised when a migration step fails or the store is newer than the code."""

    def __init__(self, message: str, version: int, step_name: str | None = None) -> None:
        self.message = message
        self.version = version
        self.step_name = step_name
        super().__init__(message)


@dataclass(frozen=True)
class MigrationStep:
    """One structural change, optionally followed by a one-time seed action."""

    name: str
    upgrade: UpgradeFn
    seed: SeedFn | None = None


def get_schema_version(connection: Connection) -> int:
    """Number of migration steps applied to the store (0 for a fresh store)."""
    return int(connection.exec_driver_sql("PRAGMA user_version").scalar() or 0)


def set_schema_version(connection: Connection, version: int) -> None:
    # PRAGMA does not accept bound parameters.
    connection.exec_driver_sql(f"PRAGMA user_version = {int(version)}")


def read_schema_version(engine: Engine) -> int:
    with engine.connect() as connection:
        return get_schema_version(connection)


def run_migrations(
    engine: Engine,
    steps: Sequence[MigrationStep],
    today: date | None = None,
) -> int:
    """
    Bring the store up to ``len(steps)`` by applying every unapplied step in order.

    Returns the number of steps applied (0 when already up to date).
    Raises MigrationError on the first failing step; earlier steps stay applied.
    """
    seed_date = today or datetime.now(timezone.utc).date()
    current = read_schema_version(engine)
    if current > len(steps):
        raise MigrationError(
            f"Store is at schema version {current} but only {len(steps)} migrations are known",
            version=current,
        )

    applied = 0
    for index in range(current, len(steps)):
        step = steps[index]
        target = index + 1
        try:
            with engine.connect() as connection:
                connection.execution_options(**{TRANSACTIONAL_DDL: True})
                with connection.begin():
                    step.upgrade(Operations(MigrationContext.configure(connection)))
                    if step.seed is not None:
                        step.seed(connection, seed_date)
                    set_schema_version(connection, target)
        except Exception as e:
            logger.error("Migration %s (%s) failed: %s", target, step.name, e)
            raise MigrationError(
                f"Migration {target} ({step.name}) failed: {e}",
                version=index,
                step_name=step.name,
            ) from e
        logger.info("Applied migration %s: %s", target, step.name)
        applied += 1

    if applied:
        logger.info("Schema now at version %s (%s step(s) applied)", len(steps), applied)
    return applied
