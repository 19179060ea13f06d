"""src/beatsync/ui/cli/display/result.py
What: Render user-facing summaries for scan and sync CLI flows.
Why: Keep console output formatting consistent across the interface.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import final

from rich.console import Console
from rich.table import Table

from beatsync.application.services import ScanSummary, SyncItemResult
from beatsync.features.transfer import TransferOutcome


@final
class ResultDisplay:
    """Handles result display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        """Initialize result display."""
        self.console = console or Console()

    def show_scan_summary(self, summary: ScanSummary, quiet: bool = False) -> None:
        """Display the outcome of indexing a levels directory."""

        if quiet:
            return

        self.console.print("\n[bold]Scan Summary:[/bold]")
        self.console.print(f"Levels directory: {summary.root}")
        self.console.print(f"Packages hashed: {summary.hashed}")
        self.console.print(f"Locations indexed: {summary.indexed}")

        if not summary.duplicates:
            self.console.print("[green]Duplicates: 0[/green]")
            return

        self.console.print(f"[yellow]Duplicates: {len(summary.duplicates)}[/yellow]")
        table = Table(show_header=True, header_style="bold")
        table.add_column("Identity", no_wrap=True)
        table.add_column("Kept")
        table.add_column("Duplicate")
        for duplicate in summary.duplicates:
            table.add_row(
                duplicate.identity[:12],
                duplicate.canonical_location.name,
                duplicate.duplicate_location.name,
            )
        self.console.print(table)

    def show_sync_results(self, results: Sequence[SyncItemResult], quiet: bool = False) -> None:
        """Display per-archive sync outcomes.

        Args:
            results: Results returned by the sync service.
            quiet: Whether to suppress non-error output.
        """
        failures = [result for result in results if not result.success]
        if quiet and not failures:
            return

        transferred = sum(1 for result in results if result.transferred)
        existing = sum(1 for result in results if result.outcome is TransferOutcome.EXISTS)
        rejected = sum(1 for result in results if result.outcome is TransferOutcome.NOT_WANTED)

        self.console.print("\n[bold]Sync Summary:[/bold]")
        self.console.print(f"Total archives processed: {len(results)}")
        self.console.print(f"[green]Transferred: {transferred}[/green]")
        self.console.print(f"Already present: {existing}")
        self.console.print(f"Skipped by history: {rejected}")

        if not failures:
            return

        self.console.print(f"[red]Failed: {len(failures)}[/red]")
        for failed in failures:
            self.console.print(f"[red]  • {failed.archive_path}: {failed.error_message}[/red]")
