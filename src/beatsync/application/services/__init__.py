"""Application services that orchestrate feature use cases."""

from .sync_service import ScanSummary, SyncItemResult, SyncRequest, SyncService, describe_archive

__all__ = ["ScanSummary", "SyncItemResult", "SyncRequest", "SyncService", "describe_archive"]
