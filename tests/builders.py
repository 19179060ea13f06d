"""Helpers for writing level package manifests in tests."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping, Sequence

DIFFICULTY_FILES: dict[str, bytes] = {
    "Easy.dat": b'{"_notes": [1]}',
    "Hard.dat": b'{"_notes": [1, 2, 3]}',
}

PackageFiles = dict[str, bytes]


def build_manifest(
    filenames: Sequence[str | None],
    *,
    song_name: str = "My Song",
    author: str = "Me",
) -> bytes:
    """Return manifest bytes declaring ``filenames`` in one Standard set."""

    difficulties = [
        {"_difficulty": f"D{index}", "_beatmapFilename": name}
        if name is not None
        else {"_difficulty": f"D{index}"}
        for index, name in enumerate(filenames)
    ]
    document = {
        "_version": "2.0.0",
        "_songName": song_name,
        "_levelAuthorName": author,
        "_difficultyBeatmapSets": [
            {"_beatmapCharacteristicName": "Standard", "_difficultyBeatmaps": difficulties}
        ],
    }
    return json.dumps(document).encode("utf-8")


def expected_identity(manifest: bytes, files: Mapping[str, bytes], order: Sequence[str]) -> str:
    """SHA-1 over the manifest followed by each file of ``order``."""

    digest = hashlib.sha1(manifest)
    for name in order:
        digest.update(files[name])
    return digest.hexdigest()
