"""SQLite persistence for the catalog collections."""

import sqlite3
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import structlog

logger = structlog.get_logger()

SCHEMA: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS films (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        description TEXT NOT NULL DEFAULT '',
        url TEXT NOT NULL DEFAULT '',
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS series (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        description TEXT NOT NULL DEFAULT '',
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        username TEXT UNIQUE NOT NULL,
        password TEXT NOT NULL,
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS library (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL,
        item_type TEXT NOT NULL,
        item_id INTEGER NOT NULL,
        added_at DATETIME DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS friends (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL,
        friend_user_id INTEGER NOT NULL,
        status TEXT NOT NULL DEFAULT 'accepted'
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS ratings (
        movie_id INTEGER NOT NULL,
        user_id INTEGER NOT NULL,
        score INTEGER NOT NULL,
        rated_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        PRIMARY KEY (movie_id, user_id)
    )
    """,
)

Row = dict[str, Any]


class DatabaseError(Exception):
    """Raised when a database operation fails."""

    def __init__(self, message: str, operation: str) -> None:
        """Initialize database error.

        Args:
            message: Error description.
            operation: Short name of the failed operation.
        """
        super().__init__(message)
        self.operation = operation


class Database:
    """Thread-safe wrapper around one SQLite connection.

    FastAPI runs sync work in a threadpool, so the connection is opened
    with check_same_thread=False and every statement holds a lock.
    """

    def __init__(self, path: str) -> None:
        """Initialize database (call initialize() before use).

        Args:
            path: Database file path, or ``:memory:``.
        """
        self.path = path
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def initialize(self) -> None:
        """Open the connection and create missing tables.

        Raises:
            DatabaseError: If the file cannot be opened or the schema fails.
        """
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)

        try:
            self._conn = sqlite3.connect(self.path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            with self._lock:
                for statement in SCHEMA:
                    self._conn.execute(statement)
                self._conn.commit()
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to initialize database: {e}", "initialize") from e

        logger.info("database_initialized", path=self.path)

    def close(self) -> None:
        """Close the connection if open."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise DatabaseError("Database is not initialized", "connect")
        return self._conn

    def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> list[Row]:
        """Run a query and return every row as a dict."""
        with self._lock:
            try:
                rows = self._connection().execute(sql, params).fetchall()
            except sqlite3.Error as e:
                raise DatabaseError(str(e), "fetch_all") from e
        return [dict(row) for row in rows]

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Row | None:
        """Run a query and return the first row, or None."""
        with self._lock:
            try:
                row = self._connection().execute(sql, params).fetchone()
            except sqlite3.Error as e:
                raise DatabaseError(str(e), "fetch_one") from e
        return dict(row) if row is not None else None

    def execute(self, sql: str, params: Sequence[Any] = ()) -> tuple[int | None, int]:
        """Run a write statement and commit.

        Returns:
            Tuple of (last inserted row id, number of changed rows).
        """
        with self._lock:
            conn = self._connection()
            try:
                cursor = conn.execute(sql, params)
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                raise DatabaseError(str(e), "execute") from e
        return cursor.lastrowid, cursor.rowcount

    def ping(self) -> None:
        """Run a trivial query.

        Raises:
            DatabaseError: If the database cannot be queried.
        """
        self.fetch_one("SELECT 1")
