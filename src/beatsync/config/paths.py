"""Where: src/beatsync/config/paths.py
What: Locate the config file, history database folder and log file.
Why: Keep a checkout self-contained; everything lives under the repository root.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

DATA_DIR_ENV: Final[str] = "BEATSYNC_DATA_DIR"
_ROOT_MARKERS: Final[tuple[str, ...]] = ("pyproject.toml", ".git")


def _detect_repo_root(start: Path | None = None) -> Path:
    """Return the nearest ancestor of ``start`` holding a root marker, else the CWD."""

    here = (start or Path(__file__).resolve()).parent
    for candidate in (here, *here.parents):
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return Path.cwd()


def default_config_path() -> Path:
    """``<repo_root>/config/config.toml``."""

    return (_detect_repo_root() / "config" / "config.toml").resolve()


def default_data_dir(env: Mapping[str, str] | None = None) -> Path:
    """History database folder, ``$BEATSYNC_DATA_DIR`` or ``<repo_root>/.data``."""

    override = (env if env is not None else os.environ).get(DATA_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser().resolve()
    return (_detect_repo_root() / ".data").resolve()


def default_log_file() -> Path:
    """``<repo_root>/logs/beatsync.log``."""

    return (_detect_repo_root() / "logs" / "beatsync.log").resolve()


__all__ = ["DATA_DIR_ENV", "default_config_path", "default_data_dir", "default_log_file"]
