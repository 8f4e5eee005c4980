"""SQLite-backed key/value storage.

A small string-to-string store with the same surface as browser local
storage. Each call opens its own connection and commits on success; there
are no transactions spanning several keys.

Storage location: ``StorageSettings.database_path``
(default ``data/encounter_tracker.db``).
"""

from __future__ import annotations

import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from encounter_tracker.core.exceptions import StorageError
from encounter_tracker.core.logging import get_logger


logger = get_logger(__name__)


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class StoredItem:
    """One stored key/value pair.

    Attributes:
        key: Storage key.
        value: Stored text.
        updated_at: When the value was last written.
    """

    key: str
    value: str
    updated_at: datetime

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> StoredItem:
        """Create from database row."""
        return cls(
            key=row[0],
            value=row[1],
            updated_at=datetime.fromisoformat(row[2]),
        )


# =============================================================================
# Local Storage
# =============================================================================


class LocalStorage:
    """Key/value storage in a single SQLite table."""

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path) -> None:
        """Initialize storage, creating the database file if needed.

        Args:
            db_path: Path to the database file.

        Raises:
            StorageError: If the database cannot be created.
        """
        self.db_path = Path(db_path)
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(
                f"Cannot create storage directory: {self.db_path.parent}",
            ) from exc
        self._init_schema()
        logger.debug("Local storage initialized", path=str(self.db_path))

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with proper cleanup."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot open storage: {exc}") from exc
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        try:
            with self._get_connection() as conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS schema_version (
                        version INTEGER PRIMARY KEY
                    )
                """)
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS items (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                """)
                conn.execute(
                    "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
                    (self.SCHEMA_VERSION,),
                )
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot initialize storage schema: {exc}") from exc

    # =========================================================================
    # Item Operations
    # =========================================================================

    def get_item(self, key: str) -> str | None:
        """Read the value stored under ``key``, or None."""
        item = self.get_record(key)
        return None if item is None else item.value

    def get_record(self, key: str) -> StoredItem | None:
        """Read the value and its write time."""
        try:
            with self._get_connection() as conn:
                row = conn.execute(
                    "SELECT key, value, updated_at FROM items WHERE key = ?",
                    (key,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot read item: {exc}", key=key) from exc
        return StoredItem.from_row(tuple(row)) if row else None

    def set_item(self, key: str, value: str) -> None:
        """Write ``value`` under ``key``, replacing any previous value."""
        now = datetime.now(timezone.utc)
        try:
            with self._get_connection() as conn:
                conn.execute(
                    "INSERT OR REPLACE INTO items (key, value, updated_at) VALUES (?, ?, ?)",
                    (key, value, now.isoformat()),
                )
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot write item: {exc}", key=key) from exc
        logger.debug("Storage item written", key=key, size=len(value))

    def remove_item(self, key: str) -> bool:
        """Delete ``key``.

        Returns:
            True if something was deleted.
        """
        try:
            with self._get_connection() as conn:
                deleted = conn.execute("DELETE FROM items WHERE key = ?", (key,)).rowcount > 0
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot delete item: {exc}", key=key) from exc
        if deleted:
            logger.debug("Storage item removed", key=key)
        return deleted

    def keys(self) -> list[str]:
        """All stored keys, sorted."""
        try:
            with self._get_connection() as conn:
                rows = conn.execute("SELECT key FROM items ORDER BY key").fetchall()
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot list items: {exc}") from exc
        return [row[0] for row in rows]

    def clear(self) -> None:
        """Delete every item."""
        try:
            with self._get_connection() as conn:
                conn.execute("DELETE FROM items")
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot clear storage: {exc}") from exc
        logger.info("Local storage cleared", path=str(self.db_path))


__all__ = [
    "LocalStorage",
    "StoredItem",
]
