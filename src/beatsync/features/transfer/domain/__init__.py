"""Transfer domain types."""

from .errors import IdentityMismatchError, TransferError
from .models import (
    ArchiveExtractResult,
    ArchiveExtractStatus,
    PackageDescriptor,
    TargetResult,
    TransferEvent,
    TransferOutcome,
)

__all__ = [
    "ArchiveExtractResult",
    "ArchiveExtractStatus",
    "IdentityMismatchError",
    "PackageDescriptor",
    "TargetResult",
    "TransferError",
    "TransferEvent",
    "TransferOutcome",
]
