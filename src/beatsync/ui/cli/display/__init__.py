"""Display management for CLI interface."""

from beatsync.ui.cli.display.progress import ProgressDisplay
from beatsync.ui.cli.display.result import ResultDisplay

__all__ = ["ProgressDisplay", "ResultDisplay"]
