"""SQLite-backed key-value store."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from shared.db.connection import Database

logger = structlog.get_logger()


class SqliteKeyValueStore:
    """SQLite implementation of the KeyValueStore protocol.

    Each set() is a single upsert committed in its own transaction, so a
    subsequent get() sees either the old value or the new one in full.
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    def get(self, key: str) -> str | None:
        row = self._db.connection.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row[0] if row is not None else None

    def set(self, key: str, value: str) -> None:
        conn = self._db.connection
        try:
            conn.execute(
                "INSERT INTO kv (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, "
                "updated_at = strftime('%Y-%m-%dT%H:%M:%fZ', 'now')",
                (key, value),
            )
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        logger.debug("saved state", key=key)
