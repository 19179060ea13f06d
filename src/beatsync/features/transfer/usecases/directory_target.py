"""
Summary: Transfer target that places packages into a levels directory.
Why: Decide, write and verify incoming packages against the content already on disk.
"""

from __future__ import annotations

import logging
import threading
import uuid
from pathlib import Path
from typing import BinaryIO, final

from beatsync.config.settings import OVERWRITE_TARGET, UNZIP_PACKAGES
from beatsync.features.hashing import ContentHasher, HashingState
from beatsync.features.history import HistoryEntry, HistoryFlag
from beatsync.features.path import DirectoryNamer
from beatsync.platform.logging import logger
from beatsync.shared import OperationCancelledError, is_cancelled

from ..domain.errors import IdentityMismatchError, TransferError
from ..domain.models import (
    ArchiveExtractResult,
    PackageDescriptor,
    TargetResult,
    TransferEvent,
    TransferOutcome,
)
from .archive_extractor import copy_stream, extract_archive
from .ports import HashCollectionPort, HistoryPort, PlaylistPort


@final
class DirectoryTarget:
    """Materialize packages under ``levels_directory``.

    Packages are either expanded into a directory named after the package or
    stored as ``<name>.zip``. Every ordinary failure is reported through the
    returned :class:`TargetResult`; only a missing descriptor raises.
    """

    target_name: str = "DirectoryTarget"

    def __init__(
        self,
        levels_directory: Path,
        hash_collection: HashCollectionPort,
        *,
        history: HistoryPort | None = None,
        playlist: PlaylistPort | None = None,
        hasher: ContentHasher | None = None,
        unzip_packages: bool = UNZIP_PACKAGES,
        overwrite_target: bool = OVERWRITE_TARGET,
    ) -> None:
        self.levels_directory: Path = levels_directory.expanduser().resolve()
        self.hash_collection: HashCollectionPort = hash_collection
        self.history: HistoryPort | None = history
        self.playlist: PlaylistPort | None = playlist
        self.hasher: ContentHasher = hasher or ContentHasher()
        self.unzip_packages: bool = unzip_packages
        self.overwrite_target: bool = overwrite_target

    def decide(self, identity: str) -> TransferOutcome:
        """Classify ``identity`` as exists, not wanted or wanted.

        Initializes the hash collection first when it has not completed a pass,
        so the call may block on a full library scan.
        """
        if not self.hash_collection.ready:
            _ = self.hash_collection.initialize()
        return self._classify(identity)

    def check_exists(self, identity: str) -> TransferOutcome:
        """Classify ``identity`` using whatever the hash collection holds right now."""

        state = self.hash_collection.state
        if state is HashingState.NOT_STARTED:
            logger.warning("Hash index hasn't hashed any packages yet.")
        elif state is HashingState.IN_PROGRESS:
            logger.warning("Hash index hasn't finished hashing.")
        return self._classify(identity)

    def transfer(
        self,
        descriptor: PackageDescriptor,
        source: BinaryIO,
        cancel_event: threading.Event | None = None,
    ) -> TargetResult:
        """Write ``source`` for ``descriptor`` into the levels directory.

        Raises:
            ValueError: If ``descriptor`` is None.
        """
        if descriptor is None:
            raise ValueError("descriptor cannot be None for transfer")

        destination = self.levels_directory / self.destination_name(descriptor)
        if is_cancelled(cancel_event):
            self._log(logging.INFO, TransferEvent.CANCELLED, "Transfer cancelled before start [%s]", descriptor)
            return self._result(False, error=OperationCancelledError("Transfer was cancelled"), cancelled=True)

        self._log(
            logging.DEBUG,
            TransferEvent.START,
            "Transferring %s [unzip=%s]",
            descriptor,
            self.unzip_packages,
            target_path=destination,
        )
        extract_result: ArchiveExtractResult | None = None
        try:
            if self.unzip_packages:
                extract_result = self._expand(descriptor, source, destination, cancel_event)
                self._verify(descriptor, extract_result)
                result = self._result(
                    extract_result.success,
                    error=extract_result.error,
                    destination=extract_result.output_directory,
                    extract_result=extract_result,
                )
            else:
                archive_path = destination.with_name(destination.name + ".zip")
                result = self._store_archive(source, archive_path, cancel_event)
        except OperationCancelledError as exc:
            self._log(logging.INFO, TransferEvent.CANCELLED, "Transfer cancelled [%s]", descriptor)
            return self._result(False, error=exc, extract_result=extract_result, cancelled=True)
        except Exception as exc:
            self._log(
                logging.WARNING,
                TransferEvent.ERROR,
                "Transfer failed for %s: %s",
                descriptor,
                exc,
                target_path=destination,
            )
            if extract_result is not None and extract_result.output_directory is not None:
                destination = extract_result.output_directory
            return self._result(False, error=exc, destination=destination, extract_result=extract_result)

        if result.success:
            self._after_success(descriptor, result)
        return result

    @staticmethod
    def destination_name(descriptor: PackageDescriptor) -> str:
        """Pick the storage name for ``descriptor``.

        Prefers the key/name/author directory name, then the key, then the
        expected identity, then a random name.
        """
        if descriptor.name is not None and descriptor.level_author_name is not None:
            name = DirectoryNamer.package_directory_name(
                descriptor.key, descriptor.name, descriptor.level_author_name
            )
        elif descriptor.key:
            name = DirectoryNamer.strip_invalid_characters(descriptor.key.strip())
        elif descriptor.identity:
            name = DirectoryNamer.strip_invalid_characters(descriptor.identity.strip())
        else:
            name = ""
        return name or uuid.uuid4().hex[:12]

    def _classify(self, identity: str) -> TransferOutcome:
        normalized = identity.strip().lower()
        if self.hash_collection.hash_exists(normalized):
            outcome = TransferOutcome.EXISTS
        elif self._rejected_by_history(normalized):
            outcome = TransferOutcome.NOT_WANTED
        else:
            outcome = TransferOutcome.WANTED
        self._log(logging.DEBUG, TransferEvent.DECIDE, "Decision for %s: %s", normalized, outcome.value)
        return outcome

    def _rejected_by_history(self, identity: str) -> bool:
        if self.history is None:
            return False
        entry = self.history.try_get(identity)
        if entry is None or entry.allow_retry:
            return False
        _ = self.history.set_flag(identity, HistoryFlag.DELETED)
        return True

    def _expand(
        self,
        descriptor: PackageDescriptor,
        source: BinaryIO,
        destination: Path,
        cancel_event: threading.Event | None,
    ) -> ArchiveExtractResult:
        if not self.levels_directory.is_dir():
            raise TransferError(f"Parent directory doesn't exist: '{self.levels_directory}'")

        extract_result = extract_archive(
            source,
            destination,
            overwrite=self.overwrite_target,
            cancel_event=cancel_event,
        )
        output_directory = extract_result.output_directory
        self._log(
            logging.DEBUG,
            TransferEvent.EXTRACT_COMPLETE,
            "Extracted %d file(s) for %s [%s]",
            len(extract_result.extracted_files),
            descriptor,
            extract_result.status.value,
            target_path=output_directory,
        )
        return extract_result

    def _verify(self, descriptor: PackageDescriptor, extract_result: ArchiveExtractResult) -> None:
        """Rehash the expanded package and compare it with the expected identity.

        A mismatching package stays on disk for inspection.
        """
        output_directory = extract_result.output_directory
        if not extract_result.success or not descriptor.identity or output_directory is None:
            return

        actual = self.hasher.hash_expanded_package(output_directory)
        expected = descriptor.identity.lower()
        if actual is None:
            self._log(
                logging.WARNING,
                TransferEvent.HASH_UNAVAILABLE,
                "Unable to get hash for '%s'.",
                descriptor,
                target_path=output_directory,
            )
        elif actual != expected:
            self._log(
                logging.ERROR,
                TransferEvent.HASH_MISMATCH,
                "Extracted package hash doesn't match expected hash for %s: %s != %s",
                descriptor,
                expected,
                actual,
                target_path=output_directory,
            )
            raise IdentityMismatchError(expected, actual)

    def _store_archive(
        self,
        source: BinaryIO,
        archive_path: Path,
        cancel_event: threading.Event | None,
    ) -> TargetResult:
        mode = "wb" if self.overwrite_target else "xb"
        opened = False
        try:
            with open(archive_path, mode) as handle:
                opened = True
                copied = copy_stream(source, handle, cancel_event=cancel_event)
        except OperationCancelledError as exc:
            self._discard_partial(archive_path)
            return self._result(False, error=exc, destination=archive_path, cancelled=True)
        except OSError as exc:
            self._log(
                logging.WARNING,
                TransferEvent.ERROR,
                "Unable to write package archive: %s",
                exc,
                target_path=archive_path,
            )
            if opened:
                self._discard_partial(archive_path)
            return self._result(False, error=exc, destination=archive_path)

        self._log(
            logging.DEBUG,
            TransferEvent.COPY_COMPLETE,
            "Stored %d byte(s)",
            copied,
            target_path=archive_path,
        )
        return self._result(True, destination=archive_path)

    def _discard_partial(self, archive_path: Path) -> None:
        """Remove an archive this target started writing but did not finish."""

        try:
            archive_path.unlink(missing_ok=True)
        except OSError as exc:
            self._log(
                logging.WARNING,
                TransferEvent.ERROR,
                "Unable to remove partial package archive: %s",
                exc,
                target_path=archive_path,
            )

    def _after_success(self, descriptor: PackageDescriptor, result: TargetResult) -> None:
        if descriptor.identity and result.destination is not None:
            _ = self.hash_collection.add_package(result.destination, descriptor.identity)
            if self.history is not None:
                _ = self.history.record(
                    HistoryEntry(
                        identity=descriptor.identity.lower(),
                        name=descriptor.name,
                        author=descriptor.level_author_name,
                        flag=HistoryFlag.DOWNLOADED,
                    )
                )
        if self.playlist is not None:
            _ = self.playlist.add(descriptor)
        self._log(
            logging.INFO,
            TransferEvent.SUCCESS,
            "Transferred %s",
            descriptor,
            target_path=result.destination,
        )

    def _result(
        self,
        success: bool,
        *,
        error: BaseException | None = None,
        destination: Path | None = None,
        extract_result: ArchiveExtractResult | None = None,
        cancelled: bool = False,
    ) -> TargetResult:
        return TargetResult(
            target_name=self.target_name,
            state=TransferOutcome.WANTED,
            success=success,
            error=error,
            destination=destination,
            extract_result=extract_result,
            cancelled=cancelled,
        )

    def _log(
        self,
        level: int,
        event: TransferEvent,
        message: str,
        *args: object,
        target_path: Path | None = None,
    ) -> None:
        logger.log(
            level,
            message,
            *args,
            extra={
                "sync_event": event.value,
                "target_path": target_path,
                "base_path": self.levels_directory,
            },
        )


__all__ = ["DirectoryTarget"]
