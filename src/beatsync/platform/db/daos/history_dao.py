"""Data access object for the history table."""

import sqlite3
import threading
from datetime import datetime, timezone
from typing import final

from beatsync.features.history import HistoryEntry, HistoryFlag
from beatsync.platform.logging import logger


@final
class HistoryDAO:
    """Persist history entries keyed by lowercase content identity."""

    conn: sqlite3.Connection
    _lock: threading.Lock

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialize DAO.

        Args:
            conn: Database connection with the history schema applied.
        """
        self.conn = conn
        self._lock = threading.Lock()

    def try_get(self, identity: str) -> HistoryEntry | None:
        """Fetch the entry for ``identity``.

        Returns:
            The stored entry, or None when absent or on database errors.
        """
        try:
            with self._lock:
                cursor = self.conn.cursor()
                _ = cursor.execute(
                    """
                    SELECT identity, name, author, flag, date_added
                    FROM history
                    WHERE identity = ?
                    """,
                    (identity.lower(),),
                )
                row = cursor.fetchone()
        except sqlite3.Error as e:
            logger.error("Database error: %s", e)
            return None
        if row is None:
            return None
        return HistoryEntry(
            identity=row[0],
            name=row[1],
            author=row[2],
            flag=HistoryFlag(row[3]),
            date_added=_parse_timestamp(row[4]),
        )

    def record(self, entry: HistoryEntry) -> bool:
        """Insert or replace ``entry``.

        Returns:
            True if successful, False otherwise.
        """
        try:
            with self._lock:
                cursor = self.conn.cursor()
                _ = cursor.execute(
                    """
                    INSERT INTO history (identity, name, author, flag, date_added)
                    VALUES (?, ?, ?, ?, ?)
                    ON CONFLICT(identity) DO UPDATE SET
                        name = COALESCE(excluded.name, history.name),
                        author = COALESCE(excluded.author, history.author),
                        flag = excluded.flag,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (
                        entry.identity.lower(),
                        entry.name,
                        entry.author,
                        int(entry.flag),
                        entry.date_added.isoformat(),
                    ),
                )
                self.conn.commit()
            return True
        except sqlite3.Error as e:
            logger.error("Database error: %s", e)
            with self._lock:
                self.conn.rollback()
            return False

    def set_flag(self, identity: str, flag: HistoryFlag) -> bool:
        """Update the flag of an existing entry.

        Returns:
            True if a row was updated, False otherwise.
        """
        try:
            with self._lock:
                cursor = self.conn.cursor()
                _ = cursor.execute(
                    """
                    UPDATE history
                    SET flag = ?, updated_at = CURRENT_TIMESTAMP
                    WHERE identity = ?
                    """,
                    (int(flag), identity.lower()),
                )
                self.conn.commit()
                return cursor.rowcount > 0
        except sqlite3.Error as e:
            logger.error("Database error: %s", e)
            with self._lock:
                self.conn.rollback()
            return False


def _parse_timestamp(value: object) -> datetime:
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            logger.debug("Unparseable history timestamp %r", value)
    return datetime.now(timezone.utc)


__all__ = ["HistoryDAO"]
