"""History domain types."""

from .models import RETRYABLE_FLAGS, HistoryEntry, HistoryFlag

__all__ = ["HistoryEntry", "HistoryFlag", "RETRYABLE_FLAGS"]
