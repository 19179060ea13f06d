"""
Summary: Parse level package manifests and enumerate declared content files.
Why: Fix the declaration order that the content identity depends on in one place.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

DIFFICULTY_SETS_KEY = "_difficultyBeatmapSets"
DIFFICULTIES_KEY = "_difficultyBeatmaps"
FILENAME_KEY = "_beatmapFilename"
SONG_NAME_KEY = "_songName"
LEVEL_AUTHOR_KEY = "_levelAuthorName"


class ManifestError(ValueError):
    """Raised when manifest bytes are not a structured JSON document."""


@dataclass(frozen=True, slots=True)
class Manifest:
    """Parsed manifest alongside the exact bytes it was read from."""

    raw: bytes
    document: dict[str, Any]

    @classmethod
    def parse(cls, raw: bytes) -> "Manifest":
        """Parse ``raw`` manifest bytes.

        Raises:
            ManifestError: If the bytes are not UTF-8 JSON describing an object.
        """
        try:
            document = json.loads(raw.decode("utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ManifestError(f"Manifest is not valid JSON: {exc}") from exc
        if not isinstance(document, dict):
            raise ManifestError(
                f"Manifest root must be an object, got {type(document).__name__}"
            )
        return cls(raw=raw, document=document)

    @property
    def song_name(self) -> str | None:
        return _as_text(self.document.get(SONG_NAME_KEY))

    @property
    def level_author_name(self) -> str | None:
        """Level author, ``""`` when the manifest declares a blank author."""

        value = self.document.get(LEVEL_AUTHOR_KEY)
        return value.strip() if isinstance(value, str) else None

    def declared_filenames(self) -> Iterator[str | None]:
        """Yield each difficulty's ``_beatmapFilename`` in declaration order.

        Difficulties without a usable filename yield ``None`` so callers can
        report them without losing their position.
        """
        for difficulty_set in _as_list(self.document.get(DIFFICULTY_SETS_KEY)):
            if not isinstance(difficulty_set, dict):
                continue
            for difficulty in _as_list(difficulty_set.get(DIFFICULTIES_KEY)):
                if not isinstance(difficulty, dict):
                    yield None
                    continue
                filename = difficulty.get(FILENAME_KEY)
                yield filename if isinstance(filename, str) and filename else None


def find_case_insensitive(candidates: Iterable[str], name: str) -> str | None:
    """Return the first candidate equal to ``name`` ignoring case."""

    folded = name.casefold()
    for candidate in candidates:
        if candidate.casefold() == folded:
            return candidate
    return None


def _as_text(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _as_list(value: object) -> list[Any]:
    return value if isinstance(value, list) else []


__all__ = [
    "DIFFICULTIES_KEY",
    "DIFFICULTY_SETS_KEY",
    "FILENAME_KEY",
    "LEVEL_AUTHOR_KEY",
    "Manifest",
    "ManifestError",
    "SONG_NAME_KEY",
    "find_case_insensitive",
]
