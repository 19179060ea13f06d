"""Database manager for beatsync."""

import sqlite3
from pathlib import Path
from typing import final, Any

from beatsync.config.paths import default_data_dir
from beatsync.platform.filesystem import ensure_directory, ensure_parent_directory
from beatsync.platform.logging import logger


@final
class DatabaseManager:
    """Database manager for beatsync."""

    db_path: str | Path
    conn: sqlite3.Connection | None

    def __init__(self, db_path: Path | str | None = None) -> None:
        """Initialize database manager.

        Args:
            db_path: Path to database file. If None, use default path in project's data directory.
                   If ":memory:", use in-memory database.
        """
        if db_path == ":memory:":
            self.db_path = ":memory:"
        elif db_path is None:
            data_dir = default_data_dir()
            _ = ensure_directory(data_dir)
            self.db_path = data_dir / "beatsync.db"
        else:
            self.db_path = Path(db_path) if isinstance(db_path, str) else db_path
        self.conn = None

    def connect(self) -> None:
        """Connect to database and initialize schema."""
        try:
            if self.db_path != ":memory:":
                if isinstance(self.db_path, Path):
                    _ = ensure_parent_directory(self.db_path)

            try:
                self.conn = sqlite3.connect(
                    self.db_path,
                    timeout=30.0,  # Wait up to 30 seconds for locks
                    isolation_level="IMMEDIATE",  # Acquire write lock immediately
                    check_same_thread=False,  # Allow DAO usage from worker threads
                )
            except sqlite3.OperationalError as e:
                if "unable to open database file" in str(e):
                    raise PermissionError(f"Unable to open database at {self.db_path}") from e
                raise

            if self.conn:
                _ = self.conn.execute("PRAGMA synchronous = NORMAL")
                _ = self.conn.execute("PRAGMA journal_mode = WAL")
                _ = self.conn.execute("PRAGMA busy_timeout = 30000")  # 30 seconds in milliseconds

                self._init_schema()

        except sqlite3.Error as e:
            logger.error("Failed to connect to database: %s", e)
            raise

    def _init_schema(self) -> None:
        """Initialize database schema."""
        if self.conn is None:
            return

        try:
            cursor = self.conn.cursor()
            _ = cursor.execute(
                """
                CREATE TABLE IF NOT EXISTS history (
                    identity TEXT PRIMARY KEY,
                    name TEXT,
                    author TEXT,
                    flag INTEGER NOT NULL DEFAULT 0,
                    date_added DATETIME NOT NULL,
                    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
                )
                """
            )
            _ = cursor.execute("CREATE INDEX IF NOT EXISTS idx_history_flag ON history(flag)")
            self.conn.commit()
            logger.debug("History schema ready")

        except sqlite3.Error as e:
            logger.error("Failed to initialize schema: %s", e)
            if self.conn:
                self.conn.rollback()
            raise

    def close(self) -> None:
        """Close database connection."""
        if self.conn:
            try:
                self.conn.close()
                self.conn = None
            except sqlite3.Error as e:
                logger.error("Failed to close database connection: %s", e)

    def __enter__(self) -> "DatabaseManager":
        """Enter context manager."""
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any | None,
    ) -> None:
        """Exit context manager."""
        self.close()
