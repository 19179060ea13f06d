"""Shared pytest fixtures for building level packages on disk."""

from __future__ import annotations

import zipfile
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from builders import DIFFICULTY_FILES, PackageFiles, build_manifest, expected_identity


@pytest.fixture
def package_files() -> PackageFiles:
    """Files of a valid two-difficulty package keyed by name."""

    files: PackageFiles = {"info.dat": build_manifest(list(DIFFICULTY_FILES))}
    files.update(DIFFICULTY_FILES)
    files["song.egg"] = b"audio-bytes"
    return files


@pytest.fixture
def package_identity(package_files: PackageFiles) -> str:
    """Identity of :func:`package_files`."""

    return expected_identity(package_files["info.dat"], package_files, list(DIFFICULTY_FILES))


@pytest.fixture
def make_package_dir() -> Callable[[Path, Mapping[str, bytes]], Path]:
    """Factory writing package files into a directory."""

    def _make(directory: Path, files: Mapping[str, bytes]) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        for name, content in files.items():
            _ = (directory / name).write_bytes(content)
        return directory

    return _make


@pytest.fixture
def make_package_zip() -> Callable[[Path, Mapping[str, bytes]], Path]:
    """Factory writing package files into a zip archive."""

    def _make(archive_path: Path, files: Mapping[str, bytes]) -> Path:
        archive_path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(archive_path, "w") as archive:
            for name, content in files.items():
                archive.writestr(name, content)
        return archive_path

    return _make
