"""src/beatsync/features/transfer/domain/models.py
What: Value types exchanged between transfer targets and their callers.
Why: Keep transfer outcomes immutable so logging and orchestration can share them safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class TransferOutcome(StrEnum):
    """Whether a package identity should be transferred to a target."""

    WANTED = "wanted"
    EXISTS = "exists"
    NOT_WANTED = "not_wanted"


class ArchiveExtractStatus(StrEnum):
    """Outcome of expanding an archive onto storage."""

    SUCCESS = "success"
    SOURCE_FAILED = "source_failed"
    DESTINATION_FAILED = "destination_failed"


class TransferEvent(StrEnum):
    """Structured event identifiers for transfer logs."""

    DECIDE = "transfer.decide"
    START = "transfer.start"
    CANCELLED = "transfer.cancelled"
    EXTRACT_COMPLETE = "transfer.extract.complete"
    COPY_COMPLETE = "transfer.copy.complete"
    HASH_MISMATCH = "transfer.hash.mismatch"
    HASH_UNAVAILABLE = "transfer.hash.unavailable"
    SUCCESS = "transfer.success"
    ERROR = "transfer.error"


@dataclass(slots=True, frozen=True)
class PackageDescriptor:
    """Catalog metadata describing one incoming package."""

    identity: str | None = None
    key: str | None = None
    name: str | None = None
    level_author_name: str | None = None

    def __str__(self) -> str:
        label = self.name or self.key or self.identity or "<unknown>"
        return f"{self.key} ({label})" if self.key and self.name else label


@dataclass(slots=True, frozen=True)
class ArchiveExtractResult:
    """Diagnostics captured while expanding an archive."""

    status: ArchiveExtractStatus
    output_directory: Path | None = None
    extracted_files: tuple[Path, ...] = ()
    existing_files: tuple[Path, ...] = ()
    error: BaseException | None = None

    @property
    def success(self) -> bool:
        return self.status is ArchiveExtractStatus.SUCCESS


@dataclass(slots=True, frozen=True)
class TargetResult:
    """Outcome of one transfer attempt against a target."""

    target_name: str
    state: TransferOutcome
    success: bool
    error: BaseException | None = None
    destination: Path | None = None
    extract_result: ArchiveExtractResult | None = None
    cancelled: bool = False

    @property
    def error_message(self) -> str | None:
        """Human readable error text, if any."""

        if self.error is None:
            return None
        return str(self.error) or type(self.error).__name__


__all__ = [
    "ArchiveExtractResult",
    "ArchiveExtractStatus",
    "PackageDescriptor",
    "TargetResult",
    "TransferEvent",
    "TransferOutcome",
]
