"""Summary: Ports defining transfer target collaborators.
Why: Decouple transfer decisions from concrete index, history and playlist adapters."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Protocol, runtime_checkable

from beatsync.features.hashing import HashingState
from beatsync.features.history import HistoryEntry, HistoryFlag

from ..domain.models import PackageDescriptor


@runtime_checkable
class HashCollectionPort(Protocol):
    """Port for identity lookups against packages already on storage."""

    @property
    def state(self) -> HashingState:
        """Lifecycle state of the collection's initialization pass."""
        ...

    @property
    def ready(self) -> bool:
        """True once the collection finished its first pass."""
        ...

    def initialize(self, cancel_event: threading.Event | None = None) -> int:
        """Populate the collection, sharing one pass across callers."""
        ...

    def hash_exists(self, identity: str) -> bool:
        """Return True when ``identity`` is present on storage."""
        ...

    def add_package(self, location: Path, identity: str) -> bool:
        """Register a package that was just placed on storage."""
        ...


@runtime_checkable
class HistoryPort(Protocol):
    """Port for persisted per-identity history."""

    def try_get(self, identity: str) -> HistoryEntry | None:
        """Return the entry recorded for ``identity``, if any."""
        ...

    def set_flag(self, identity: str, flag: HistoryFlag) -> bool:
        """Update the flag of an existing entry."""
        ...

    def record(self, entry: HistoryEntry) -> bool:
        """Insert or replace an entry."""
        ...


@runtime_checkable
class PlaylistPort(Protocol):
    """Port receiving packages that were transferred successfully."""

    def add(self, descriptor: PackageDescriptor) -> bool:
        """Record membership; returns False when already present."""
        ...

    def save(self) -> None:
        """Persist pending membership changes."""
        ...


__all__ = ["HashCollectionPort", "HistoryPort", "PlaylistPort"]
