"""Tests for the history data access object."""

from collections.abc import Generator
from datetime import datetime, timezone

import pytest

from beatsync.features.history import HistoryEntry, HistoryFlag
from beatsync.platform.db.daos.history_dao import HistoryDAO
from beatsync.platform.db.db_manager import DatabaseManager


@pytest.fixture
def history_dao() -> Generator[HistoryDAO, None, None]:
    """Create a history DAO backed by an in-memory database."""
    manager = DatabaseManager(":memory:")
    manager.connect()
    assert manager.conn is not None
    yield HistoryDAO(manager.conn)
    manager.close()


def test_try_get_missing_returns_none(history_dao: HistoryDAO) -> None:
    assert history_dao.try_get("abc") is None


def test_record_and_fetch_round_trip(history_dao: HistoryDAO) -> None:
    added = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    entry = HistoryEntry(identity="ABC", name="Song", author="Me", flag=HistoryFlag.DOWNLOADED, date_added=added)

    assert history_dao.record(entry)
    fetched = history_dao.try_get("abc")

    assert fetched is not None
    assert fetched.identity == "abc"
    assert fetched.name == "Song"
    assert fetched.author == "Me"
    assert fetched.flag is HistoryFlag.DOWNLOADED
    assert fetched.date_added == added


def test_record_keeps_known_names_on_update(history_dao: HistoryDAO) -> None:
    _ = history_dao.record(HistoryEntry(identity="abc", name="Song", author="Me"))

    _ = history_dao.record(HistoryEntry(identity="abc", flag=HistoryFlag.ERROR))
    fetched = history_dao.try_get("abc")

    assert fetched is not None
    assert fetched.flag is HistoryFlag.ERROR
    assert fetched.name == "Song"
    assert fetched.author == "Me"


def test_set_flag_updates_existing_only(history_dao: HistoryDAO) -> None:
    _ = history_dao.record(HistoryEntry(identity="abc"))

    assert history_dao.set_flag("ABC", HistoryFlag.DELETED)
    assert not history_dao.set_flag("missing", HistoryFlag.DELETED)
    fetched = history_dao.try_get("abc")
    assert fetched is not None
    assert fetched.flag is HistoryFlag.DELETED
