"""
Summary: Tests for the levels directory hash index.
Why: Guard single-flight initialization, duplicate handling and cancellation.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from beatsync.features.hashing import ContentHasher, HashIndex, HashingState
from beatsync.shared import OperationCancelledError
from builders import DIFFICULTY_FILES, PackageFiles, build_manifest

MakeDir = Callable[[Path, Mapping[str, bytes]], Path]
MakeZip = Callable[[Path, Mapping[str, bytes]], Path]


def _distinct_package(song_name: str) -> dict[str, bytes]:
    return {"info.dat": build_manifest(list(DIFFICULTY_FILES), song_name=song_name), **DIFFICULTY_FILES}


@pytest.fixture
def levels_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "CustomLevels"
    directory.mkdir()
    return directory


def test_initialize_indexes_directories_and_archives(
    levels_dir: Path,
    package_files: PackageFiles,
    package_identity: str,
    make_package_dir: MakeDir,
    make_package_zip: MakeZip,
) -> None:
    _ = make_package_dir(levels_dir / "a (Song - Me)", package_files)
    other = _distinct_package("Other")
    archive = make_package_zip(levels_dir / "b.zip", other)
    index = HashIndex(levels_dir)

    assert index.state is HashingState.NOT_STARTED
    assert index.initialize() == 2
    assert index.ready
    assert index.state is HashingState.COMPLETE
    assert index.hash_exists(package_identity)
    assert index.hash_exists(package_identity.upper())
    record = index.get_record(archive)
    assert record is not None
    assert record.identity == ContentHasher().hash_archived_package(archive)
    assert record.quick_hash is not None


def test_initialize_is_idempotent(
    levels_dir: Path, package_files: PackageFiles, make_package_dir: MakeDir
) -> None:
    _ = make_package_dir(levels_dir / "pkg", package_files)
    index = HashIndex(levels_dir)

    first = index.initialize()
    _ = make_package_dir(levels_dir / "late", _distinct_package("Late"))
    second = index.initialize()

    assert first == second == 1
    assert len(index) == 1


def test_locations_without_identity_are_not_indexed(
    levels_dir: Path, package_files: PackageFiles, make_package_dir: MakeDir
) -> None:
    _ = make_package_dir(levels_dir / "pkg", package_files)
    empty = make_package_dir(levels_dir / "empty", {"cover.jpg": b"jpg"})
    _ = (levels_dir / "notes.txt").write_text("not a package")

    index = HashIndex(levels_dir)
    _ = index.initialize()

    assert len(index) == 1
    assert index.get_record(empty) is None


def test_first_location_wins_for_duplicate_identity(
    levels_dir: Path,
    package_files: PackageFiles,
    package_identity: str,
    make_package_dir: MakeDir,
) -> None:
    first = make_package_dir(levels_dir / "a copy", package_files)
    second = make_package_dir(levels_dir / "b copy", package_files)
    index = HashIndex(levels_dir, max_workers=1)

    _ = index.initialize()

    assert len(index) == 2
    assert index.canonical_location(package_identity) == first.resolve()
    assert [dup.duplicate_location for dup in index.duplicates] == [second.resolve()]


def test_missing_root_raises_and_allows_retry(tmp_path: Path) -> None:
    index = HashIndex(tmp_path / "missing")

    with pytest.raises(FileNotFoundError):
        _ = index.initialize()

    assert index.state is HashingState.NOT_STARTED
    (tmp_path / "missing").mkdir()
    assert index.initialize() == 0
    assert index.ready


def test_cancelled_initialize_keeps_partial_results(
    levels_dir: Path, make_package_dir: MakeDir
) -> None:
    for name in ("a", "b", "c"):
        _ = make_package_dir(levels_dir / name, _distinct_package(name))

    cancel_event = threading.Event()
    hasher = ContentHasher()
    original = hasher.hash_expanded_package

    def cancelling_hash(directory: Path, existing_identity: str | None = None) -> str | None:
        identity = original(directory, existing_identity)
        cancel_event.set()
        return identity

    hasher.hash_expanded_package = cancelling_hash  # type: ignore[method-assign]
    index = HashIndex(levels_dir, hasher, max_workers=1)

    with pytest.raises(OperationCancelledError):
        _ = index.initialize(cancel_event)

    assert not index.ready
    assert index.state is HashingState.NOT_STARTED
    assert len(index) == 1

    hasher.hash_expanded_package = original  # type: ignore[method-assign]
    assert index.initialize() == 2
    assert len(index) == 3
    assert index.ready


def test_concurrent_callers_share_one_pass(
    levels_dir: Path, package_files: PackageFiles, make_package_dir: MakeDir
) -> None:
    _ = make_package_dir(levels_dir / "pkg", package_files)
    hasher = ContentHasher()
    original = hasher.hash_expanded_package
    calls: list[Path] = []
    release = threading.Event()

    def slow_hash(directory: Path, existing_identity: str | None = None) -> str | None:
        calls.append(directory)
        _ = release.wait(5)
        return original(directory, existing_identity)

    hasher.hash_expanded_package = slow_hash  # type: ignore[method-assign]
    index = HashIndex(levels_dir, hasher)
    results: list[int] = []

    def run() -> None:
        results.append(index.initialize())

    threads = [threading.Thread(target=run) for _ in range(4)]
    for thread in threads:
        thread.start()
    time.sleep(0.05)
    release.set()
    for thread in threads:
        thread.join(5)

    assert results == [1, 1, 1, 1]
    assert len(calls) == 1


def test_add_package_registers_new_location(levels_dir: Path) -> None:
    index = HashIndex(levels_dir)
    location = levels_dir / "fresh"

    assert index.add_package(location, "ABC123")
    assert not index.add_package(location, "abc123")
    assert index.hash_exists("abc123")
    assert index.canonical_location("ABC123") == location.resolve()
