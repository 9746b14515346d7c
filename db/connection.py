"""
db/connection.py
----------------
Connection providers handed to repositories at construction time.

PostgresConnectionProvider wraps psycopg2's ThreadedConnectionPool for
efficient, thread-safe connection reuse. SQLiteConnectionProvider opens a
short-lived sqlite3 connection per call and is meant for local runs and tests.
Both hand out connections through the `connection()` context manager, which
always gives the connection back, even when releasing it fails.
"""

import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, ContextManager, Iterator, Protocol

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, DB_BACKEND, DB_POOL_MAX, DB_POOL_MIN, SQLITE_PATH
from db.errors import ConnectionAcquisitionError
from utils.logger import get_logger

logger = get_logger(__name__)


class ConnectionProvider(Protocol):
    """What a repository needs from its injected store."""

    dialect: str
    placeholder: str
    driver_error: type[Exception]

    def open(self) -> None:
        ...

    def close(self) -> None:
        ...

    def connection(self) -> ContextManager[Any]:
        ...


@contextmanager
def open_cursor(conn) -> Iterator[Any]:
    """
    Yield a cursor on `conn` and close it on exit.

    A failure while closing is logged and dropped so it never replaces
    the outcome of the statement that ran on the cursor.
    """
    cur = conn.cursor()
    try:
        yield cur
    finally:
        try:
            cur.close()
        except Exception as e:
            logger.warning(f"Failed to close cursor: {e}")


# ── PostgreSQL ────────────────────────────────────────────


class PostgresConnectionProvider:
    """Pooled PostgreSQL connections via psycopg2."""

    dialect = "postgresql"
    placeholder = "%s"
    driver_error = psycopg2.Error

    def __init__(self, dsn: str = DATABASE_URL, min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX):
        self.dsn = dsn
        self.min_conn = min_conn
        self.max_conn = max_conn
        self._pool: pool.ThreadedConnectionPool | None = None

    def open(self) -> None:
        """
        Initialize the connection pool.

        Raises:
            psycopg2.OperationalError: If the database is unreachable.
        """
        if self._pool is not None:
            return
        try:
            self._pool = pool.ThreadedConnectionPool(self.min_conn, self.max_conn, self.dsn)
            logger.info("Database connection pool initialized successfully.")
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")

    @contextmanager
    def connection(self) -> Iterator[Any]:
        """Borrow a connection from the pool for the duration of the block."""
        conn = self._acquire()
        try:
            yield conn
        finally:
            self._release(conn)

    def _acquire(self):
        if self._pool is None:
            raise ConnectionAcquisitionError("Database pool not initialized. Call open() first.")
        try:
            return self._pool.getconn()
        except psycopg2.Error as e:
            raise ConnectionAcquisitionError(f"Could not get a connection from the pool: {e}") from e

    def _release(self, conn) -> None:
        try:
            if self._pool is not None:
                self._pool.putconn(conn)
        except Exception as e:
            logger.warning(f"Failed to return connection to the pool: {e}")


# ── SQLite ────────────────────────────────────────────────


def _adapt_datetime(value: datetime) -> str:
    return value.isoformat()


def _convert_timestamp(value: bytes) -> datetime:
    try:
        return datetime.fromisoformat(value.decode())
    except ValueError as e:
        raise sqlite3.DataError(f"Invalid timestamp {value!r}: {e}") from e


class SQLiteConnectionProvider:
    """One sqlite3 connection per call against a database file."""

    dialect = "sqlite"
    placeholder = "?"
    driver_error = sqlite3.Error

    def __init__(self, path: str | Path = SQLITE_PATH):
        self.path = Path(path).expanduser()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        sqlite3.register_adapter(datetime, _adapt_datetime)
        sqlite3.register_converter("TIMESTAMP", _convert_timestamp)

    def open(self) -> None:
        """Nothing to set up; connections are opened per call."""

    def close(self) -> None:
        """Nothing to tear down."""

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Open a connection for the duration of the block."""
        try:
            conn = sqlite3.connect(self.path, detect_types=sqlite3.PARSE_DECLTYPES)
        except sqlite3.Error as e:
            raise ConnectionAcquisitionError(f"Could not open {self.path}: {e}") from e
        try:
            yield conn
        finally:
            try:
                conn.close()
            except Exception as e:
                logger.warning(f"Failed to close sqlite connection: {e}")


def build_provider():
    """
    Create the provider named by DB_BACKEND.

    Returns:
        A PostgresConnectionProvider (not yet opened) or a SQLiteConnectionProvider.

    Raises:
        ValueError: If DB_BACKEND names an unknown backend.
    """
    if DB_BACKEND == "postgresql":
        return PostgresConnectionProvider()
    if DB_BACKEND == "sqlite":
        return SQLiteConnectionProvider()
    raise ValueError(f"Unknown DB_BACKEND: {DB_BACKEND!r}")
