"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool for efficient connection reuse
across the worker threads that serve requests.

One `Database` is built per application and handed to the repositories;
the pool itself is only opened on first use.
"""

import threading
from contextlib import contextmanager

import psycopg2
from psycopg2 import pool

from config import (
    DATABASE_URL,
    DB_CONNECT_TIMEOUT,
    DB_POOL_MAX,
    DB_POOL_MIN,
    DB_SSLMODE,
)
from utils.errors import ConfigurationError, StorageError
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS_SQL = """
    SELECT column_name
    FROM information_schema.columns
    WHERE table_schema = current_schema() AND table_name = %s;
"""


class Database:
    """
    Lazily opened connection pool plus a small schema cache.

    Attributes:
        dsn: PostgreSQL connection string, or None when not configured yet.
        min_conn: Connections opened when the pool is created.
        max_conn: Upper bound on live connections.
        connect_timeout: Seconds to wait for a new connection or a free slot.
    """

    def __init__(
        self,
        dsn: str | None = None,
        min_conn: int = DB_POOL_MIN,
        max_conn: int = DB_POOL_MAX,
        connect_timeout: int = DB_CONNECT_TIMEOUT,
        sslmode: str = DB_SSLMODE,
    ):
        self.dsn = dsn or None
        self.min_conn = min_conn
        self.max_conn = max_conn
        self.connect_timeout = connect_timeout
        self.sslmode = sslmode
        self._pool: pool.ThreadedConnectionPool | None = None
        self._slots = threading.BoundedSemaphore(max_conn)
        self._lock = threading.Lock()
        self._columns: dict[str, frozenset[str]] = {}

    @classmethod
    def from_env(cls) -> "Database":
        """Build a Database from the values in config.py."""
        return cls(DATABASE_URL)

    @property
    def configured(self) -> bool:
        return bool(self.dsn)

    def configure(self, dsn: str) -> None:
        """
        Point the handle at a new connection string.

        A pool opened for the previous string is closed and the schema
        cache is dropped, so the next request connects to `dsn`.
        """
        if dsn == self.dsn:
            return
        self.close()
        self.forget_schema()
        self.dsn = dsn
        logger.info("Database URL configured at runtime.")

    # ── Pool lifecycle ────────────────────────────────────

    def _ensure_pool(self) -> pool.ThreadedConnectionPool:
        if self._pool is not None:
            return self._pool
        if not self.dsn:
            raise ConfigurationError("No database URL available")
        with self._lock:
            if self._pool is None:
                try:
                    self._pool = pool.ThreadedConnectionPool(
                        self.min_conn,
                        self.max_conn,
                        self.dsn,
                        connect_timeout=self.connect_timeout,
                        sslmode=self.sslmode,
                    )
                except psycopg2.OperationalError as e:
                    logger.error(f"Failed to initialize database pool: {e}")
                    raise
                logger.info("Database pool created.")
        return self._pool

    def acquire(self):
        """
        Get a connection from the pool, waiting for a free slot if needed.

        Returns:
            A psycopg2 connection object.

        Raises:
            ConfigurationError: If no connection string is configured.
            StorageError: If no connection frees up within the timeout.
            psycopg2.OperationalError: If the database is unreachable.
        """
        db_pool = self._ensure_pool()
        if not self._slots.acquire(timeout=self.connect_timeout):
            raise StorageError("Timed out waiting for a database connection")
        try:
            return db_pool.getconn()
        except Exception:
            self._slots.release()
            raise

    def release(self, conn) -> None:
        """
        Return a connection back to the pool.

        Args:
            conn: The psycopg2 connection to release.
        """
        try:
            if self._pool is None:
                conn.close()
            else:
                self._pool.putconn(conn, close=bool(conn.closed))
        except pool.PoolError:
            # handed out by a pool that was closed or replaced since
            conn.close()
        finally:
            self._slots.release()

    @contextmanager
    def connection(self):
        """Context manager around acquire/release."""
        conn = self.acquire()
        try:
            yield conn
        finally:
            self.release(conn)

    def close(self) -> None:
        """Close all connections in the pool."""
        with self._lock:
            if self._pool is not None:
                self._pool.closeall()
                self._pool = None
                logger.info("Database connection pool closed.")

    # ── Schema probe ──────────────────────────────────────

    def columns(self, table: str) -> frozenset[str]:
        """
        Column names of a table in the current schema, cached after the
        first lookup.
        """
        cached = self._columns.get(table)
        if cached is not None:
            return cached
        with self.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(_COLUMNS_SQL, (table,))
                names = frozenset(r[0] for r in cur.fetchall())
            conn.commit()
        if names:
            self._columns[table] = names
        logger.info(f"Schema probe: {table} has {len(names)} columns")
        return names

    def has_column(self, table: str, column: str) -> bool:
        """
        True when `table` has `column`.

        Columns are only ever added, so a hit is trusted from the cache
        while a miss is looked up again in case the table was upgraded
        since the last probe.
        """
        was_cached = table in self._columns
        if column in self.columns(table):
            return True
        if not was_cached:
            return False
        self.forget_schema(table)
        return column in self.columns(table)

    def forget_schema(self, table: str | None = None) -> None:
        """Drop cached column lists, e.g. after the schema was changed."""
        if table is None:
            self._columns.clear()
        else:
            self._columns.pop(table, None)
