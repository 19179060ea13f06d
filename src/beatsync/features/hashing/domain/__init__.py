"""Domain types for package hashing."""

from .manifest import Manifest, ManifestError, find_case_insensitive
from .models import DuplicatePackage, HashRecord, HashingState

__all__ = [
    "DuplicatePackage",
    "HashRecord",
    "HashingState",
    "Manifest",
    "ManifestError",
    "find_case_insensitive",
]
