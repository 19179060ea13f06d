"""Errors raised inside transfer targets before being captured into results."""

from __future__ import annotations


class TransferError(Exception):
    """A transfer could not place or verify its content."""


class IdentityMismatchError(TransferError):
    """Content written to storage hashed to a different identity than expected."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"Extracted package hash doesn't match expected hash: {expected} != {actual}")
        self.expected: str = expected
        self.actual: str = actual


__all__ = ["IdentityMismatchError", "TransferError"]
