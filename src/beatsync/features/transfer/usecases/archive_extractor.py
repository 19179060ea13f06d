"""
Summary: Expand an incoming zip byte stream into a package directory.
Why: Keep archive handling separate from the transfer decision flow.
"""

from __future__ import annotations

import shutil
import tempfile
import threading
import zipfile
from pathlib import Path
from typing import BinaryIO

from beatsync.config.settings import COPY_CHUNK_SIZE
from beatsync.platform.filesystem import ensure_directory, find_available_path
from beatsync.platform.logging import logger
from beatsync.shared import raise_if_cancelled

from ..domain.models import ArchiveExtractResult, ArchiveExtractStatus


def copy_stream(
    source: BinaryIO,
    destination: BinaryIO,
    *,
    cancel_event: threading.Event | None = None,
    chunk_size: int = COPY_CHUNK_SIZE,
) -> int:
    """Copy ``source`` into ``destination`` chunk by chunk.

    Cancellation is checked before every chunk.

    Returns:
        Number of bytes copied.

    Raises:
        OperationCancelledError: If ``cancel_event`` is set mid-copy.
    """
    copied = 0
    while True:
        raise_if_cancelled(cancel_event, "Stream copy")
        chunk = source.read(chunk_size)
        if not chunk:
            return copied
        _ = destination.write(chunk)
        copied += len(chunk)


def extract_archive(
    source: BinaryIO,
    destination: Path,
    *,
    overwrite: bool = False,
    cancel_event: threading.Event | None = None,
) -> ArchiveExtractResult:
    """Spool ``source`` to a temporary file and expand it into ``destination``.

    When ``destination`` already exists and ``overwrite`` is False, the first
    free ``"<name> (n)"`` sibling is used instead. Members that would escape
    the output directory are skipped.

    Raises:
        OperationCancelledError: If ``cancel_event`` is set while spooling.
    """
    with tempfile.TemporaryFile(prefix="beatsync-", suffix=".zip") as spool:
        _ = copy_stream(source, spool, cancel_event=cancel_event)
        _ = spool.seek(0)

        try:
            archive = zipfile.ZipFile(spool)
        except (zipfile.BadZipFile, OSError) as exc:
            logger.warning("Incoming package is not a readable zip archive: %s", exc)
            return ArchiveExtractResult(status=ArchiveExtractStatus.SOURCE_FAILED, error=exc)

        with archive:
            output_directory = destination if overwrite else find_available_path(destination)
            extracted: list[Path] = []
            existing: list[Path] = []
            try:
                _ = ensure_directory(output_directory)
                root = output_directory.resolve()
                for info in archive.infolist():
                    if info.is_dir():
                        continue
                    target = (output_directory / info.filename).resolve()
                    if not target.is_relative_to(root):
                        logger.warning("Skipping archive member outside package: %s", info.filename)
                        continue
                    if target.exists():
                        existing.append(target)
                    target.parent.mkdir(parents=True, exist_ok=True)
                    with archive.open(info) as member, open(target, "wb") as handle:
                        shutil.copyfileobj(member, handle, COPY_CHUNK_SIZE)
                    extracted.append(target)
            except (OSError, zipfile.BadZipFile, RuntimeError) as exc:
                logger.warning("Failed to extract package into '%s': %s", output_directory, exc)
                return ArchiveExtractResult(
                    status=ArchiveExtractStatus.DESTINATION_FAILED,
                    output_directory=output_directory,
                    extracted_files=tuple(extracted),
                    existing_files=tuple(existing),
                    error=exc,
                )

    return ArchiveExtractResult(
        status=ArchiveExtractStatus.SUCCESS,
        output_directory=output_directory,
        extracted_files=tuple(extracted),
        existing_files=tuple(existing),
    )


__all__ = ["copy_stream", "extract_archive"]
