"""Test database functionality."""

import sqlite3
from collections.abc import Generator
from pathlib import Path

import pytest

from beatsync.platform.db.db_manager import DatabaseManager


@pytest.fixture
def db_manager() -> Generator[DatabaseManager, None, None]:
    """Create a database manager with in-memory database.

    Yields:
        DatabaseManager: Database manager instance.
    """
    manager = DatabaseManager(":memory:")  # Use in-memory database for isolation
    manager.connect()
    yield manager
    manager.close()


def test_schema_creates_history_table(db_manager: DatabaseManager) -> None:
    """History table and its flag index should exist after connecting."""
    conn = db_manager.conn
    assert conn is not None
    cursor = conn.cursor()

    _ = cursor.execute("SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'history'")
    assert cursor.fetchone() is not None

    _ = cursor.execute("SELECT name FROM sqlite_master WHERE type = 'index' AND name = 'idx_history_flag'")
    assert cursor.fetchone() is not None


def test_identity_is_primary_key(db_manager: DatabaseManager) -> None:
    """Inserting the same identity twice should violate the primary key."""
    conn = db_manager.conn
    assert conn is not None
    insert = "INSERT INTO history (identity, flag, date_added) VALUES (?, ?, ?)"
    _ = conn.execute(insert, ("abc", 0, "2024-01-01T00:00:00+00:00"))

    with pytest.raises(sqlite3.IntegrityError):
        _ = conn.execute(insert, ("abc", 1, "2024-01-01T00:00:00+00:00"))


def test_file_database_creates_parent_directories(tmp_path: Path) -> None:
    """Database files in missing folders should get their parents created."""
    db_path = tmp_path / "nested" / "state" / "beatsync.db"

    with DatabaseManager(db_path) as manager:
        assert manager.conn is not None

    assert db_path.exists()
    assert manager.conn is None


def test_default_path_honors_data_dir_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Without an explicit path the database should live in the data directory."""
    monkeypatch.setenv("BEATSYNC_DATA_DIR", str(tmp_path / "data"))

    manager = DatabaseManager()

    assert manager.db_path == (tmp_path / "data").resolve() / "beatsync.db"
    assert (tmp_path / "data").is_dir()
