"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final


@final
@dataclass(slots=True)
class ScanArgs:
    """Command line arguments for the ``scan`` subcommand."""

    command: Literal["scan"]
    levels_path: Path
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class AddArgs:
    """Command line arguments for the ``add`` subcommand."""

    command: Literal["add"]
    archives: tuple[Path, ...]
    levels_path: Path
    unzip_packages: bool
    overwrite_target: bool
    playlist_path: Path | None
    verbose: bool
    quiet: bool


CLIArgs = ScanArgs | AddArgs

__all__ = ["AddArgs", "CLIArgs", "ScanArgs"]
