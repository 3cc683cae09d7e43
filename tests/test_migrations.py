"""Tests for the schema migrator: versioning, resume from a partial store, seeding, failures."""

import unittest
from datetime import date

from sqlalchemy import inspect, text

from pushups.core.database import create_db_engine
from pushups.core.migrations import (
    MigrationError,
    MigrationStep,
    read_schema_version,
    run_migrations,
    set_schema_version,
)
from pushups.migrations import LATEST_VERSION, MIGRATIONS, migrate


def _settings_rows(engine) -> dict[str, str]:
    with engine.connect() as conn:
        return dict(conn.execute(text("SELECT key, value FROM settings")).all())


class TestFreshStore(unittest.TestCase):
    """An empty store runs every step, including seeds."""

    def setUp(self) -> None:
        self.engine = create_db_engine("sqlite://")

    def tearDown(self) -> None:
        self.engine.dispose()

    def test_version_starts_at_zero(self) -> None:
        self.assertEqual(read_schema_version(self.engine), 0)

    def test_applies_all_steps(self) -> None:
        applied = migrate(self.engine, today=date(2025, 3, 10))
        self.assertEqual(applied, len(MIGRATIONS))
        self.assertEqual(read_schema_version(self.engine), LATEST_VERSION)
        tables = set(inspect(self.engine).get_table_names())
        self.assertTrue({"users", "pushup_entries", "settings"} <= tables)

    def test_users_have_rabbit_columns(self) -> None:
        migrate(self.engine, today=date(2025, 3, 10))
        columns = {c["name"] for c in inspect(self.engine).get_columns("users")}
        self.assertEqual(columns, {"id", "name", "secret", "is_rabbit", "rabbit_target"})

    def test_seeds_challenge_dates(self) -> None:
        migrate(self.engine, today=date(2025, 3, 10))
        rows = _settings_rows(self.engine)
        self.assertEqual(rows["challenge_start"], "2025-03-10")
        self.assertEqual(rows["challenge_end"], "2025-04-10")
        self.assertNotIn("challenge_title", rows)
        self.assertNotIn("challenge_goal", rows)

    def test_seed_clamps_month_overflow(self) -> None:
        migrate(self.engine, today=date(2025, 1, 31))
        self.assertEqual(_settings_rows(self.engine)["challenge_end"], "2025-02-28")


class TestIdempotentResume(unittest.TestCase):
    """Applied steps are never re-run; partial stores resume from their version."""

    def setUp(self) -> None:
        self.engine = create_db_engine("sqlite://")

    def tearDown(self) -> None:
        self.engine.dispose()

    def test_second_run_is_noop(self) -> None:
        migrate(self.engine, today=date(2025, 3, 10))
        applied = migrate(self.engine, today=date(2030, 1, 1))
        self.assertEqual(applied, 0)
        self.assertEqual(read_schema_version(self.engine), LATEST_VERSION)
        self.assertEqual(_settings_rows(self.engine)["challenge_start"], "2025-03-10")

    def test_partial_store_reaches_latest(self) -> None:
        for k in range(len(MIGRATIONS)):
            with self.subTest(k=k):
                engine = create_db_engine("sqlite://")
                try:
                    self.assertEqual(run_migrations(engine, MIGRATIONS[:k]), k)
                    self.assertEqual(read_schema_version(engine), k)
                    applied = migrate(engine, today=date(2025, 3, 10))
                    self.assertEqual(applied, len(MIGRATIONS) - k)
                    self.assertEqual(read_schema_version(engine), LATEST_VERSION)
                finally:
                    engine.dispose()

    def test_rows_survive_later_steps(self) -> None:
        run_migrations(self.engine, MIGRATIONS[:3], today=date(2025, 3, 10))
        with self.engine.begin() as conn:
            conn.execute(text("INSERT INTO users (name, secret) VALUES ('alice', 's1')"))
        migrate(self.engine)
        with self.engine.connect() as conn:
            row = conn.execute(
                text("SELECT name, is_rabbit, rabbit_target FROM users")
            ).one()
        self.assertEqual(tuple(row), ("alice", 0, 0))


class TestFailures(unittest.TestCase):
    """A failing step aborts the run and leaves the version at the last completed step."""

    def setUp(self) -> None:
        self.engine = create_db_engine("sqlite://")

    def tearDown(self) -> None:
        self.engine.dispose()

    def test_failing_structural_change(self) -> None:
        broken = MigrationStep(
            "duplicate users table",
            lambda op: op.execute("CREATE TABLE users (id INTEGER)"),
        )
        with self.assertRaises(MigrationError) as ctx:
            run_migrations(self.engine, (*MIGRATIONS[:2], broken))
        self.assertEqual(ctx.exception.version, 2)
        self.assertEqual(ctx.exception.step_name, "duplicate users table")
        self.assertEqual(read_schema_version(self.engine), 2)

    def test_failing_seed_rolls_back_its_table(self) -> None:
        def boom(connection, today) -> None:
            raise RuntimeError("seed failed")

        step = MigrationStep(
            "extra table",
            lambda op: op.execute("CREATE TABLE extra (id INTEGER)"),
            seed=boom,
        )
        with self.assertRaises(MigrationError):
            run_migrations(self.engine, (MIGRATIONS[0], step))
        self.assertEqual(read_schema_version(self.engine), 1)
        self.assertNotIn("extra", inspect(self.engine).get_table_names())

    def test_retry_after_fix(self) -> None:
        broken = MigrationStep("broken", lambda op: op.execute("NOT VALID SQL"))
        with self.assertRaises(MigrationError):
            run_migrations(self.engine, (MIGRATIONS[0], broken))
        self.assertEqual(migrate(self.engine), len(MIGRATIONS) - 1)
        self.assertEqual(read_schema_version(self.engine), LATEST_VERSION)

    def test_store_newer_than_code(self) -> None:
        with self.engine.begin() as conn:
            set_schema_version(conn, LATEST_VERSION + 5)
        with self.assertRaises(MigrationError):
            migrate(self.engine)


if __name__ == "__main__":
    unittest.main()
