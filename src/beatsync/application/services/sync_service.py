"""Application service for syncing level packages into a levels directory.

This layer centralizes construction of the hash index, history store,
playlist and transfer target so that UIs only describe what to sync.
"""

from __future__ import annotations

import threading
import zipfile
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import final

from beatsync.config.settings import MANIFEST_FILE_NAME, OVERWRITE_TARGET, UNZIP_PACKAGES
from beatsync.features.hashing import ContentHasher, DuplicatePackage, HashIndex, Manifest
from beatsync.features.hashing.domain import ManifestError, find_case_insensitive
from beatsync.features.history import HistoryEntry, HistoryFlag
from beatsync.features.path import DirectoryNamer
from beatsync.features.transfer import (
    DirectoryTarget,
    HistoryPort,
    PackageDescriptor,
    TargetResult,
    TransferEvent,
    TransferOutcome,
)
from beatsync.platform.db.daos.history_dao import HistoryDAO
from beatsync.platform.db.db_manager import DatabaseManager
from beatsync.platform.logging import logger
from beatsync.platform.playlists import JsonPlaylist
from beatsync.shared import is_cancelled


@dataclass(frozen=True)
class SyncRequest:
    """Input parameters for a sync run.

    Attributes:
        levels_path: Custom levels directory receiving packages.
        archives: Local package archives to sync, in order.
        unzip_packages: Expand archives instead of storing ``.zip`` files.
        overwrite_target: Replace existing destinations instead of picking a free name.
        playlist_path: Optional playlist document receiving synced packages.
        db_path: History database location; ``None`` uses the data directory.
    """

    levels_path: Path
    archives: tuple[Path, ...] = ()
    unzip_packages: bool = UNZIP_PACKAGES
    overwrite_target: bool = OVERWRITE_TARGET
    playlist_path: Path | None = None
    db_path: Path | str | None = None


@dataclass(slots=True)
class SyncItemResult:
    """Outcome of syncing one archive."""

    archive_path: Path
    descriptor: PackageDescriptor | None
    outcome: TransferOutcome | None
    target_result: TargetResult | None = None
    error_message: str | None = None

    @property
    def transferred(self) -> bool:
        return self.target_result is not None and self.target_result.success

    @property
    def success(self) -> bool:
        """True unless the archive was invalid or its transfer failed."""

        if self.error_message is not None:
            return False
        if self.target_result is None:
            return self.outcome is not None
        return self.target_result.success


@dataclass(slots=True)
class ScanSummary:
    """Outcome of indexing a levels directory."""

    root: Path
    hashed: int
    indexed: int
    duplicates: list[DuplicatePackage] = field(default_factory=list)


@final
class SyncService:
    """Application service that syncs local package archives."""

    def __init__(
        self,
        *,
        db_factory: Callable[[Path | str | None], DatabaseManager] | None = None,
        hasher_factory: Callable[[], ContentHasher] | None = None,
    ) -> None:
        """Create a service with overridable infrastructure factories."""

        self._db_factory: Callable[[Path | str | None], DatabaseManager] = (
            db_factory or DatabaseManager
        )
        self._hasher_factory: Callable[[], ContentHasher] = hasher_factory or ContentHasher

    def scan(self, levels_path: Path, cancel_event: threading.Event | None = None) -> ScanSummary:
        """Index ``levels_path`` and report what was found.

        Raises:
            FileNotFoundError: If ``levels_path`` does not exist.
        """
        index = HashIndex(levels_path, self._hasher_factory())
        hashed = index.initialize(cancel_event)
        return ScanSummary(
            root=index.root,
            hashed=hashed,
            indexed=len(index),
            duplicates=list(index.duplicates),
        )

    def sync_archives(
        self,
        request: SyncRequest,
        cancel_event: threading.Event | None = None,
        progress_callback: Callable[[int, int, Path], None] | None = None,
    ) -> list[SyncItemResult]:
        """Transfer every archive in ``request`` that the levels directory lacks."""

        hasher = self._hasher_factory()
        index = HashIndex(request.levels_path, hasher)
        playlist = JsonPlaylist(request.playlist_path) if request.playlist_path else None
        results: list[SyncItemResult] = []

        with self._db_factory(request.db_path) as db_manager:
            assert db_manager.conn is not None
            history = HistoryDAO(db_manager.conn)
            target = DirectoryTarget(
                request.levels_path,
                index,
                history=history,
                playlist=playlist,
                hasher=hasher,
                unzip_packages=request.unzip_packages,
                overwrite_target=request.overwrite_target,
            )
            _ = index.initialize(cancel_event)

            total = len(request.archives)
            for position, archive_path in enumerate(request.archives, start=1):
                if is_cancelled(cancel_event):
                    logger.info("Sync cancelled after %d of %d archive(s)", position - 1, total)
                    break
                results.append(
                    self._sync_archive(archive_path, hasher, target, history, cancel_event)
                )
                if progress_callback:
                    progress_callback(position, total, archive_path)

        if playlist is not None:
            playlist.save()
        return results

    def _sync_archive(
        self,
        archive_path: Path,
        hasher: ContentHasher,
        target: DirectoryTarget,
        history: HistoryPort,
        cancel_event: threading.Event | None,
    ) -> SyncItemResult:
        identity = hasher.hash_archived_package(archive_path)
        if identity is None:
            return SyncItemResult(
                archive_path=archive_path,
                descriptor=None,
                outcome=None,
                error_message="Not a valid level package",
            )

        descriptor = describe_archive(archive_path, identity)
        outcome = target.decide(identity)
        if outcome is not TransferOutcome.WANTED:
            logger.info(
                "Skipping %s: %s",
                descriptor,
                outcome.value,
                extra={"sync_event": TransferEvent.DECIDE.value, "source_path": archive_path},
            )
            return SyncItemResult(archive_path=archive_path, descriptor=descriptor, outcome=outcome)

        with open(archive_path, "rb") as stream:
            target_result = target.transfer(descriptor, stream, cancel_event)
        if not target_result.success and not target_result.cancelled:
            _ = history.record(
                HistoryEntry(
                    identity=identity,
                    name=descriptor.name,
                    author=descriptor.level_author_name,
                    flag=HistoryFlag.ERROR,
                )
            )
        return SyncItemResult(
            archive_path=archive_path,
            descriptor=descriptor,
            outcome=outcome,
            target_result=target_result,
            error_message=target_result.error_message if not target_result.success else None,
        )


def describe_archive(archive_path: Path, identity: str) -> PackageDescriptor:
    """Build a descriptor from an archive's manifest and file name.

    The key is taken from the first word of the file name when it parses as a
    catalog key, matching the ``"{key} ({name} - {author})"`` naming rule.
    """
    stem_head = archive_path.stem.split(" ", 1)[0]
    key = DirectoryNamer.parse_key(stem_head)
    manifest = _read_archive_manifest(archive_path)
    return PackageDescriptor(
        identity=identity,
        key=key,
        name=manifest.song_name if manifest else None,
        level_author_name=manifest.level_author_name if manifest else None,
    )


def _read_archive_manifest(archive_path: Path) -> Manifest | None:
    try:
        with zipfile.ZipFile(archive_path) as archive:
            names: Sequence[str] = archive.namelist()
            manifest_entry = find_case_insensitive(names, MANIFEST_FILE_NAME)
            if manifest_entry is None:
                return None
            return Manifest.parse(archive.read(manifest_entry))
    except (OSError, zipfile.BadZipFile, ManifestError) as exc:
        logger.debug("Unable to read manifest from %s: %s", archive_path, exc)
        return None


__all__ = ["ScanSummary", "SyncItemResult", "SyncRequest", "SyncService", "describe_archive"]
