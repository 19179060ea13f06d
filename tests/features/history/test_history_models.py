"""Tests for history entries and retry eligibility."""

from __future__ import annotations

import pytest

from beatsync.features.history import HistoryEntry, HistoryFlag


@pytest.mark.parametrize(
    ("flag", "allowed"),
    [
        (HistoryFlag.NONE, True),
        (HistoryFlag.ERROR, True),
        (HistoryFlag.DOWNLOADED, False),
        (HistoryFlag.DELETED, False),
        (HistoryFlag.MISSING, False),
        (HistoryFlag.PREEXISTING, False),
        (HistoryFlag.NOT_FOUND, False),
        (HistoryFlag.BEATSAVER_NOT_FOUND, False),
    ],
)
def test_allow_retry_by_flag(flag: HistoryFlag, allowed: bool) -> None:
    assert HistoryEntry(identity="abc", flag=flag).allow_retry is allowed


def test_flag_values_are_stable() -> None:
    assert [int(flag) for flag in HistoryFlag] == list(range(8))


def test_date_added_defaults_to_utc() -> None:
    entry = HistoryEntry(identity="abc")

    assert entry.date_added.tzinfo is not None
