"""
Summary: Value types describing hashed packages and hash index state.
Why: Share immutable records between the hasher, the index and transfer targets.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class HashingState(StrEnum):
    """Lifecycle of a hash index initialization pass."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


@dataclass(slots=True, frozen=True)
class HashRecord:
    """Identity computed for one package location."""

    identity: str | None
    source_location: Path
    quick_hash: int | None = None


@dataclass(slots=True, frozen=True)
class DuplicatePackage:
    """Two locations that hashed to the same content identity."""

    identity: str
    canonical_location: Path
    duplicate_location: Path


__all__ = ["DuplicatePackage", "HashRecord", "HashingState"]
