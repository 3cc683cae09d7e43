"""SQLite connection and session management."""

from collections.abc import Generator
from functools import lru_cache
from pathlib import Path

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pushups.core.config import settings

# Execution option enabling an explicit transaction on a connection.
TRANSACTIONAL_DDL = "pushups_transactional_ddl"


def _ensure_parent_dir(url: str) -> None:
    """Create the directory holding a file-backed SQLite database."""
    database = make_url(url).database
    if database and database != ":memory:" and not database.startswith("file:"):
        Path(database).expanduser().parent.mkdir(parents=True, exist_ok=True)


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """
    Build an engine for a SQLite URL.

    The pysqlite driver runs in autocommit mode: every statement issued by a
    request is its own transaction. Connections flagged with TRANSACTIONAL_DDL
    (migration runs) open BEGIN IMMEDIATE instead, so a failed step rolls back
    its DDL together with its seed and version stamp.
    In-memory databases share a single connection across threads.
    """
    in_memory = make_url(url).database in (None, "", ":memory:")
    kwargs: dict = {"connect_args": {"check_same_thread": False}, "echo": echo}
    if in_memory:
        kwargs["poolclass"] = StaticPool
    else:
        _ensure_parent_dir(url)
    engine = create_engine(url, **kwargs)

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None
        if not in_memory:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn) -> None:
        if conn.get_execution_options().get(TRANSACTIONAL_DDL):
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to engine; sessions are closed per request."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@lru_cache
def get_engine() -> Engine:
    """Process-wide engine for the configured DATABASE_URL."""
    return create_db_engine(settings.DATABASE_URL, echo=settings.DEBUG)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that yields a DB session from the app's factory and closes it when done."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
