"""
Summary: History records describing past sync decisions per content identity.
Why: Let transfer targets skip packages a user removed or that were already handled.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum


class HistoryFlag(IntEnum):
    """Last known disposition of a package identity."""

    NONE = 0
    DOWNLOADED = 1
    DELETED = 2
    MISSING = 3
    PREEXISTING = 4
    ERROR = 5
    NOT_FOUND = 6
    BEATSAVER_NOT_FOUND = 7


RETRYABLE_FLAGS: frozenset[HistoryFlag] = frozenset({HistoryFlag.NONE, HistoryFlag.ERROR})


@dataclass(slots=True)
class HistoryEntry:
    """One history row keyed by content identity."""

    identity: str
    name: str | None = None
    author: str | None = None
    flag: HistoryFlag = HistoryFlag.NONE
    date_added: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def allow_retry(self) -> bool:
        """True when a new transfer attempt is acceptable for this identity."""

        return self.flag in RETRYABLE_FLAGS


__all__ = ["HistoryEntry", "HistoryFlag", "RETRYABLE_FLAGS"]
