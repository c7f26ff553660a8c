"""Database connection management.

Handles SQLite connection setup, PRAGMA configuration, the generic
query / insert-or-replace helpers and the context manager protocol.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any, Sequence

logger = logging.getLogger("itchy.database")

__all__ = ["ConnectionBase"]


class ConnectionBase:
    """Base class providing SQLite connection setup and lifecycle.

    Enables foreign keys. Calls _ensure_schema() which is provided by
    SchemaMixin via multiple inheritance.
    """

    SCHEMA_VERSION = 1

    # Tables save_record() may write to
    TABLES: frozenset[str] = frozenset({"games", "files", "traits"})

    conn: sqlite3.Connection
    db_path: Path

    def __init__(self, db_path: Path) -> None:
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file.
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.conn = sqlite3.connect(str(self.db_path))
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA foreign_keys = ON")

        self._ensure_schema()

    def query(self, sql: str, params: Sequence[Any] = ()) -> list[sqlite3.Row]:
        """Run a parameterized statement and fetch all resulting rows.

        The statement and its parameters are logged at debug level when
        SQLite rejects them; the original error is re-raised.

        Args:
            sql: The SQL statement with ``?`` placeholders.
            params: Values bound to the placeholders.

        Returns:
            All rows produced by the statement (empty for writes).
        """
        try:
            cursor = self.conn.execute(sql, tuple(params))
            rows = cursor.fetchall()
            cursor.close()
        except sqlite3.Error:
            logger.debug(sql)
            logger.debug("%r", list(params))
            raise
        return rows

    def save_record(self, table: str, data: dict[str, Any]) -> None:
        """Insert or replace the given column -> value mapping into a table.

        Does NOT commit -- caller is responsible for committing.

        Args:
            table: One of the known tables.
            data: Column names mapped to their values.

        Raises:
            ValueError: If the table is unknown or data is empty.
        """
        if table not in self.TABLES:
            raise ValueError(f"Unknown table: {table}")
        if not data:
            raise ValueError("No columns to save")

        columns = ",".join(f'"{column}"' for column in data)
        placeholders = ",".join("?" for _ in data)
        sql = f'INSERT OR REPLACE INTO "{table}" ({columns}) VALUES ({placeholders})'
        values = list(data.values())

        try:
            self.conn.execute(sql, values)
        except sqlite3.Error:
            logger.debug(sql)
            logger.debug("%r", values)
            raise

    def commit(self) -> None:
        """Commit current transaction."""
        self.conn.commit()

    def close(self) -> None:
        """Close database connection."""
        self.conn.close()

    def __enter__(self) -> ConnectionBase:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.commit()
        self.close()
