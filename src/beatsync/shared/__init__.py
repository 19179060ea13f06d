# Where: beatsync.shared.__init__
# What: Provide a concise import surface for shared cross-cutting helpers.
# Why: Encourage consistent reuse of shared helpers across features.

"""Shared cross-cutting utilities exposed at the package level."""

from .cancellation import OperationCancelledError, is_cancelled, raise_if_cancelled

__all__ = ["OperationCancelledError", "is_cancelled", "raise_if_cancelled"]
