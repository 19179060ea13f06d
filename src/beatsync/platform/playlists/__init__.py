"""Playlist adapters."""

from .json_playlist import JsonPlaylist

__all__ = ["JsonPlaylist"]
