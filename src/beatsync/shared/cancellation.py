"""Summary: Cooperative cancellation helpers built on ``threading.Event``.
Why: Give hashing and transfer units one shared way to observe a stop request.
"""

from __future__ import annotations

import threading


class OperationCancelledError(Exception):
    """Raised when a cooperative cancellation signal was observed."""


def is_cancelled(cancel_event: threading.Event | None) -> bool:
    """Return True when ``cancel_event`` is present and set."""

    return cancel_event is not None and cancel_event.is_set()


def raise_if_cancelled(cancel_event: threading.Event | None, operation: str) -> None:
    """Raise ``OperationCancelledError`` for ``operation`` if cancellation was requested."""

    if is_cancelled(cancel_event):
        raise OperationCancelledError(f"{operation} was cancelled")


__all__ = ["OperationCancelledError", "is_cancelled", "raise_if_cancelled"]
