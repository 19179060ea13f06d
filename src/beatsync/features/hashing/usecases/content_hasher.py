"""
Summary: Derive content identities for expanded and archived level packages.
Why: Give the index and transfer targets one deterministic identity for any package format.
"""

from __future__ import annotations

import hashlib
import zipfile
from collections.abc import Iterable, Iterator
from pathlib import Path, PurePosixPath
from typing import BinaryIO, final

from beatsync.config.settings import HASH_CHUNK_SIZE, MANIFEST_FILE_NAME
from beatsync.platform.logging import logger

from ..domain.manifest import Manifest, ManifestError, find_case_insensitive


def _iter_chunks(handle: BinaryIO, chunk_size: int) -> Iterator[bytes]:
    return iter(lambda: handle.read(chunk_size), b"")


@final
class ContentHasher:
    """Compute SHA-1 content identities for level packages.

    The identity is the digest of the manifest bytes followed by every
    declared difficulty file's bytes, in the order the manifest declares them.
    Container format and directory name do not participate.
    """

    chunk_size: int

    def __init__(self, chunk_size: int = HASH_CHUNK_SIZE) -> None:
        self.chunk_size = chunk_size if chunk_size > 0 else HASH_CHUNK_SIZE

    def hash_expanded_package(
        self, directory: Path, existing_identity: str | None = None
    ) -> str | None:
        """Hash a package laid out as a directory of files.

        Args:
            directory: Package directory containing the manifest.
            existing_identity: Previously known identity; a mismatch is logged.

        Returns:
            Lowercase hex identity, or None when the directory is gone, has no
            manifest, or the manifest cannot be parsed.
        """
        try:
            files = {entry.name: entry for entry in directory.iterdir() if entry.is_file()}
        except FileNotFoundError:
            logger.warning("Package directory no longer exists: %s", directory)
            return None
        except NotADirectoryError:
            logger.warning("Package location is not a directory: %s", directory)
            return None

        manifest_name = find_case_insensitive(files, MANIFEST_FILE_NAME)
        if manifest_name is None:
            logger.debug("'%s' does not have an '%s' file.", directory, MANIFEST_FILE_NAME)
            return None

        try:
            manifest = Manifest.parse(files[manifest_name].read_bytes())
        except ManifestError as exc:
            logger.warning("Invalid manifest in package at '%s', skipping. %s", directory, exc)
            return None

        def parts() -> Iterator[bytes]:
            yield manifest.raw
            for filename in manifest.declared_filenames():
                if filename is None:
                    logger.warning(
                        "_beatmapFilename property is missing in %s", files[manifest_name]
                    )
                    continue
                match = find_case_insensitive(files, filename)
                if match is None:
                    logger.warning("Missing difficulty file %s in %s", filename, directory)
                    continue
                with open(files[match], "rb") as handle:
                    yield from _iter_chunks(handle, self.chunk_size)

        return self._finish(self.compute_identity(parts()), directory, existing_identity)

    def hash_archived_package(
        self, archive_path: Path, existing_identity: str | None = None
    ) -> str | None:
        """Hash a package stored as a zip archive.

        The manifest is matched by its full entry name; difficulty files are
        matched by entry base name. Both comparisons ignore case.

        Returns:
            Lowercase hex identity, or None when the archive cannot be read or
            carries no manifest entry.
        """
        if not archive_path.is_file():
            logger.warning("Package archive does not exist: %s", archive_path)
            return None

        try:
            with zipfile.ZipFile(archive_path) as archive:
                entries = [info for info in archive.infolist() if not info.is_dir()]
                manifest_entry = find_case_insensitive(
                    (info.filename for info in entries), MANIFEST_FILE_NAME
                )
                if manifest_entry is None:
                    logger.debug(
                        "'%s' does not have an '%s' file.", archive_path, MANIFEST_FILE_NAME
                    )
                    return None

                manifest = Manifest.parse(archive.read(manifest_entry))
                by_base_name: dict[str, zipfile.ZipInfo] = {}
                for info in entries:
                    _ = by_base_name.setdefault(PurePosixPath(info.filename).name, info)

                def parts() -> Iterator[bytes]:
                    yield manifest.raw
                    for filename in manifest.declared_filenames():
                        if filename is None:
                            logger.warning(
                                "_beatmapFilename property is missing in %s", archive_path
                            )
                            continue
                        match = find_case_insensitive(by_base_name, filename)
                        if match is None:
                            logger.warning(
                                "Missing difficulty file %s in %s", filename, archive_path
                            )
                            continue
                        with archive.open(by_base_name[match]) as handle:
                            yield from _iter_chunks(handle, self.chunk_size)

                identity = self.compute_identity(parts())
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile, RuntimeError) as exc:
            logger.warning("Unable to hash package archive '%s': %s", archive_path, exc)
            return None
        except ManifestError as exc:
            logger.warning("Invalid manifest in archive '%s', skipping. %s", archive_path, exc)
            return None

        return self._finish(identity, archive_path, existing_identity)

    @staticmethod
    def compute_identity(parts: Iterable[bytes]) -> str:
        """Digest ``parts`` in order and return the lowercase hex identity."""

        digest = hashlib.sha1()
        for part in parts:
            digest.update(part)
        return digest.hexdigest()

    @staticmethod
    def quick_directory_hash(directory: Path) -> int:
        """Fingerprint a directory from file names, sizes and modification times.

        Cheap to compute and sensitive to touches, so it is suited to change
        detection but never to identity.
        """
        fingerprint = hashlib.blake2b(digest_size=8)
        for entry in sorted(directory.iterdir(), key=lambda item: item.name):
            if not entry.is_file():
                continue
            stat = entry.stat()
            fingerprint.update(f"{entry.name}|{stat.st_size}|{stat.st_mtime_ns}\n".encode())
        return int.from_bytes(fingerprint.digest(), "big")

    @staticmethod
    def quick_archive_hash(archive_path: Path) -> int:
        """Fingerprint an archive file from its name, size and modification time."""

        stat = archive_path.stat()
        fingerprint = hashlib.blake2b(digest_size=8)
        fingerprint.update(f"{archive_path.name}|{stat.st_size}|{stat.st_mtime_ns}".encode())
        return int.from_bytes(fingerprint.digest(), "big")

    @staticmethod
    def _finish(identity: str, location: Path, existing_identity: str | None) -> str:
        if existing_identity and existing_identity.lower() != identity:
            logger.warning("Hash doesn't match the existing hash for %s", location)
        return identity


__all__ = ["ContentHasher"]
