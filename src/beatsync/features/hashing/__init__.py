"""
Summary: Public surface of the package hashing feature.
Why: Let transfer targets and services import hashing types from one place.
"""

from .domain import (
    DuplicatePackage,
    HashRecord,
    HashingState,
    Manifest,
    ManifestError,
)
from .usecases import ContentHasher, HashIndex

__all__ = [
    "ContentHasher",
    "DuplicatePackage",
    "HashIndex",
    "HashRecord",
    "HashingState",
    "Manifest",
    "ManifestError",
]
