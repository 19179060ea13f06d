"""
Summary: Public surface of the package transfer feature.
Why: Give orchestration code one import path for targets and their results.
"""

from .domain import (
    ArchiveExtractResult,
    ArchiveExtractStatus,
    IdentityMismatchError,
    PackageDescriptor,
    TargetResult,
    TransferError,
    TransferEvent,
    TransferOutcome,
)
from .usecases import DirectoryTarget, HashCollectionPort, HistoryPort, PlaylistPort

__all__ = [
    "ArchiveExtractResult",
    "ArchiveExtractStatus",
    "DirectoryTarget",
    "HashCollectionPort",
    "HistoryPort",
    "IdentityMismatchError",
    "PackageDescriptor",
    "PlaylistPort",
    "TargetResult",
    "TransferError",
    "TransferEvent",
    "TransferOutcome",
]
