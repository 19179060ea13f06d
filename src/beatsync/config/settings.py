"""Where: src/beatsync/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Expose validated constants to feature layers without file I/O.
Assumptions: - Config defaults remain compatible with current runtime expectations.
Trade-offs: - Validation is limited to simple boundary checks for speed.
"""

from __future__ import annotations

from beatsync.config.config import HASH_WORKERS_DEFAULT, config as app_config

# Package layout ---------------------------------------------------------------

# Manifest file every level package carries at its root (matched case-insensitively).
MANIFEST_FILE_NAME: str = "info.dat"

# Suffixes treated as archived packages when scanning a levels directory.
ARCHIVE_EXTENSIONS: tuple[str, ...] = (".zip",)


# I/O sizing -----------------------------------------------------------------

# Read size used while feeding package bytes into the digest.
HASH_CHUNK_SIZE: int = 64 * 1024

# Buffer size used when copying an incoming stream onto storage.
COPY_CHUNK_SIZE: int = 81920


# Concurrency ----------------------------------------------------------------

_hash_workers = getattr(app_config, "hash_workers", HASH_WORKERS_DEFAULT)
HASH_WORKERS: int = (
    _hash_workers
    if isinstance(_hash_workers, int) and _hash_workers > 0
    else HASH_WORKERS_DEFAULT
)


# Transfer defaults ----------------------------------------------------------

UNZIP_PACKAGES: bool = bool(getattr(app_config, "unzip_packages", True))
OVERWRITE_TARGET: bool = bool(getattr(app_config, "overwrite_target", False))


__all__ = [
    "MANIFEST_FILE_NAME",
    "ARCHIVE_EXTENSIONS",
    "HASH_CHUNK_SIZE",
    "COPY_CHUNK_SIZE",
    "HASH_WORKERS",
    "UNZIP_PACKAGES",
    "OVERWRITE_TARGET",
]
