"""
Summary: In-memory index of package identities for a levels directory.
Why: Answer "is this content already present?" without rehashing the library per query.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import final

from beatsync.config.settings import ARCHIVE_EXTENSIONS, HASH_WORKERS
from beatsync.platform.logging import logger
from beatsync.shared import is_cancelled, raise_if_cancelled

from ..domain.models import DuplicatePackage, HashRecord, HashingState
from .content_hasher import ContentHasher

HashFunction = Callable[[Path], "str | None"]


@final
class HashIndex:
    """Location and identity maps for every package under ``root``.

    ``by_location`` is insert-always and ``by_identity`` is insert-if-absent,
    so the first location to finish hashing becomes the canonical one for its
    identity. Later locations with the same identity are recorded in
    ``duplicates``. Locations that do not hash (no manifest, bad manifest) are
    logged and left out of both maps. Entries are never removed.
    """

    def __init__(
        self,
        root: Path,
        hasher: ContentHasher | None = None,
        *,
        max_workers: int = HASH_WORKERS,
        executor_factory: Callable[[], ThreadPoolExecutor] | None = None,
    ) -> None:
        self.root: Path = root.expanduser().resolve()
        self.hasher: ContentHasher = hasher or ContentHasher()
        self._max_workers: int = max(1, max_workers)
        self._executor_factory: Callable[[], ThreadPoolExecutor] = (
            executor_factory or self._default_executor
        )
        self._by_location: dict[Path, HashRecord] = {}
        self._by_identity: dict[str, Path] = {}
        self._duplicates: list[DuplicatePackage] = []
        self._maps_lock: threading.Lock = threading.Lock()
        self._init_lock: threading.Lock = threading.Lock()
        self._init_future: Future[int] | None = None
        self._state: HashingState = HashingState.NOT_STARTED

    @property
    def state(self) -> HashingState:
        """Current lifecycle state of the initialization pass."""

        return self._state

    @property
    def ready(self) -> bool:
        """True once an initialization pass completed without cancellation."""

        return self._state is HashingState.COMPLETE

    @property
    def duplicates(self) -> tuple[DuplicatePackage, ...]:
        """Duplicate content observed so far, in detection order."""

        with self._maps_lock:
            return tuple(self._duplicates)

    def __len__(self) -> int:
        with self._maps_lock:
            return len(self._by_location)

    def initialize(self, cancel_event: threading.Event | None = None) -> int:
        """Hash every package under ``root`` that is not indexed yet.

        Concurrent callers share one pass; once a pass completes, later calls
        return its result without touching the filesystem again. A failed or
        cancelled pass releases the slot, keeping whatever it inserted, so a
        later call only hashes the locations still missing.

        Returns:
            Number of package locations newly added by the pass.

        Raises:
            FileNotFoundError: If ``root`` does not exist.
            OperationCancelledError: If ``cancel_event`` fired during the pass.
        """
        with self._init_lock:
            owner = self._init_future is None
            if owner:
                self._init_future = Future()
            future = self._init_future
        assert future is not None

        if not owner:
            return future.result()

        try:
            result = self._hash_root(cancel_event)
        except BaseException as exc:
            with self._init_lock:
                self._init_future = None
            self._state = HashingState.NOT_STARTED
            future.set_exception(exc)
            raise
        future.set_result(result)
        return result

    def hash_exists(self, identity: str) -> bool:
        """Return True if a package with ``identity`` is indexed."""

        with self._maps_lock:
            return identity.lower() in self._by_identity

    def canonical_location(self, identity: str) -> Path | None:
        """Return the location that owns ``identity`` in the index."""

        with self._maps_lock:
            return self._by_identity.get(identity.lower())

    def get_record(self, location: Path) -> HashRecord | None:
        """Return the hash record stored for ``location``."""

        with self._maps_lock:
            return self._by_location.get(location.expanduser().resolve())

    def add_package(self, location: Path, identity: str) -> bool:
        """Register a package placed on storage outside of a scan.

        Returns:
            True if ``location`` was not indexed before.
        """
        record = HashRecord(identity=identity.lower(), source_location=location.resolve())
        return self._insert(record)

    def _hash_root(self, cancel_event: threading.Event | None) -> int:
        if not self.root.is_dir():
            raise FileNotFoundError(f"Levels directory doesn't exist: {self.root}")

        started = time.perf_counter()
        self._state = HashingState.IN_PROGRESS

        with self._maps_lock:
            indexed = set(self._by_location)
        entries = sorted(self.root.iterdir(), key=lambda entry: entry.name)
        directories = [entry for entry in entries if entry.is_dir() and entry not in indexed]
        hashed = self._run_phase(directories, self.hasher.hash_expanded_package, cancel_event)

        archives = [
            entry
            for entry in entries
            if entry.is_file()
            and entry.suffix.lower() in ARCHIVE_EXTENSIONS
            and entry not in indexed
        ]
        hashed += self._run_phase(archives, self.hasher.hash_archived_package, cancel_event)

        raise_if_cancelled(cancel_event, "Hash index initialization")
        self._state = HashingState.COMPLETE
        logger.debug(
            "Finished hashing %d package(s) under %s in %.0fms.",
            hashed,
            self.root,
            (time.perf_counter() - started) * 1000,
        )
        return hashed

    def _run_phase(
        self,
        locations: Sequence[Path],
        hash_function: HashFunction,
        cancel_event: threading.Event | None,
    ) -> int:
        if not locations:
            return 0
        with self._executor_factory() as executor:
            futures = [
                executor.submit(self._hash_unit, location, hash_function, cancel_event)
                for location in locations
            ]
            return sum(future.result() for future in futures)

    def _hash_unit(
        self,
        location: Path,
        hash_function: HashFunction,
        cancel_event: threading.Event | None,
    ) -> int:
        if is_cancelled(cancel_event):
            return 0
        try:
            identity = hash_function(location)
            if identity is None:
                logger.warning("No hash produced for '%s' (No info.dat?).", location.name)
                return 0
            quick_hash = (
                self.hasher.quick_directory_hash(location)
                if location.is_dir()
                else self.hasher.quick_archive_hash(location)
            )
        except Exception as exc:
            logger.warning("Unhandled exception hashing package at '%s', skipping. %s", location, exc)
            logger.debug("Hashing failure for %s", location, exc_info=True)
            return 0

        record = HashRecord(identity=identity, source_location=location, quick_hash=quick_hash)
        return 1 if self._insert(record) else 0

    def _insert(self, record: HashRecord) -> bool:
        identity = record.identity
        location = record.source_location
        with self._maps_lock:
            added = location not in self._by_location
            self._by_location[location] = record
            if identity is None:
                return added
            canonical = self._by_identity.setdefault(identity, location)
            if canonical != location:
                self._duplicates.append(
                    DuplicatePackage(
                        identity=identity,
                        canonical_location=canonical,
                        duplicate_location=location,
                    )
                )
        if canonical != location:
            logger.debug("Duplicate package detected: %s : %s", canonical.name, location.name)
        return added

    def _default_executor(self) -> ThreadPoolExecutor:
        return ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="package-hasher")


__all__ = ["HashIndex"]
