"""
Summary: Public surface of the sync history feature.
Why: Share history records between persistence and transfer decisions.
"""

from .domain import RETRYABLE_FLAGS, HistoryEntry, HistoryFlag

__all__ = ["HistoryEntry", "HistoryFlag", "RETRYABLE_FLAGS"]
