"""JSON playlist document recording synced packages."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, final

from beatsync.config.file_ops import write_text_file
from beatsync.features.transfer import PackageDescriptor
from beatsync.platform.logging import logger

DEFAULT_PLAYLIST_TITLE = "BeatSync Playlist"
DEFAULT_PLAYLIST_AUTHOR = "beatsync"


@final
class JsonPlaylist:
    """Playlist stored as a ``.bplist``-style JSON document.

    Songs are keyed by lowercase identity; adding a known identity is a no-op.
    Descriptors without an identity cannot be referenced and are ignored.
    """

    path: Path
    title: str
    author: str

    def __init__(
        self,
        path: Path,
        *,
        title: str = DEFAULT_PLAYLIST_TITLE,
        author: str = DEFAULT_PLAYLIST_AUTHOR,
    ) -> None:
        self.path = path
        self.title = title
        self.author = author
        self._songs: dict[str, dict[str, Any]] = {}
        self._dirty = False
        self._lock = threading.Lock()
        self._load()

    def __len__(self) -> int:
        return len(self._songs)

    def __contains__(self, identity: object) -> bool:
        return isinstance(identity, str) and identity.lower() in self._songs

    def add(self, descriptor: PackageDescriptor) -> bool:
        """Add ``descriptor`` to the playlist; returns False if already present."""

        if not descriptor.identity:
            logger.debug("Not adding %s to playlist: no identity", descriptor)
            return False
        identity = descriptor.identity.lower()
        with self._lock:
            if identity in self._songs:
                return False
            song: dict[str, Any] = {"hash": identity}
            if descriptor.key:
                song["key"] = descriptor.key
            if descriptor.name:
                song["songName"] = descriptor.name
            if descriptor.level_author_name:
                song["levelAuthorName"] = descriptor.level_author_name
            self._songs[identity] = song
            self._dirty = True
        return True

    def save(self) -> None:
        """Write the playlist when it changed since the last load or save."""

        with self._lock:
            if not self._dirty:
                return
            document = {
                "playlistTitle": self.title,
                "playlistAuthor": self.author,
                "songs": list(self._songs.values()),
            }
            write_text_file(self.path, json.dumps(document, indent=2, ensure_ascii=False))
            self._dirty = False
        logger.info("Playlist saved to %s (%d songs)", self.path, len(self._songs))

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            document = json.loads(self.path.read_text(encoding="utf-8-sig"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Unable to read playlist %s, starting empty: %s", self.path, e)
            return
        if not isinstance(document, dict):
            logger.warning("Playlist %s is not a JSON object, starting empty", self.path)
            return
        self.title = document.get("playlistTitle") or self.title
        self.author = document.get("playlistAuthor") or self.author
        for song in document.get("songs") or []:
            if isinstance(song, dict) and isinstance(song.get("hash"), str):
                _ = self._songs.setdefault(song["hash"].lower(), song)


__all__ = ["JsonPlaylist"]
