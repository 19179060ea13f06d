"""Filesystem helpers reused across multiple layers."""

from __future__ import annotations

from pathlib import Path


def ensure_directory(directory: Path) -> Path:
    """Ensure ``directory`` exists as a folder and return it."""

    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {directory}")
        return directory

    directory.mkdir(parents=True, exist_ok=True)
    return directory


def ensure_parent_directory(path: Path) -> Path:
    """Ensure the parent directory for ``path`` exists and return it."""

    parent = path.parent
    return ensure_directory(parent)


def find_available_path(target_path: Path) -> Path:
    """Find an available path by appending `` (n)`` to the name if needed."""

    if not target_path.exists():
        return target_path

    parent = target_path.parent
    stem = target_path.stem if target_path.suffix and not target_path.is_dir() else target_path.name
    extension = target_path.suffix if stem != target_path.name else ""
    counter = 1

    while True:
        candidate = parent / f"{stem} ({counter}){extension}"
        if not candidate.exists():
            return candidate
        counter += 1


__all__ = ["ensure_directory", "ensure_parent_directory", "find_available_path"]
