"""Utility helpers for configuration and document persistence."""

from __future__ import annotations

import os
from pathlib import Path


def write_text_file(path: Path, content: str) -> None:
    """Persist textual content ensuring parent directories exist.

    The content is written to a sibling temporary file first and then moved
    into place so readers never observe a half-written document.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    staging = path.with_name(f".{path.name}.tmp")
    _ = staging.write_text(content, encoding="utf-8")
    os.replace(staging, path)


__all__ = ["write_text_file"]
