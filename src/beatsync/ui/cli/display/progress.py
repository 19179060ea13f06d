"""Progress display functionality for CLI."""

from pathlib import Path
from threading import Event
from typing import Any, Callable, Protocol, final, runtime_checkable

from rich.console import Console
from rich.progress import Progress, TaskID

from beatsync.application.services import SyncItemResult, SyncRequest
from beatsync.platform.logging import PathRichHandler, logger


@runtime_checkable
class SyncServiceLike(Protocol):
    """Protocol for application services that can sync archives with progress."""

    def sync_archives(
        self,
        request: SyncRequest,
        cancel_event: Event | None = None,
        progress_callback: Callable[[int, int, Path], None] | None = None,
    ) -> list[SyncItemResult]:
        ...


def logging_console() -> Console | None:
    """Return the console the rich log handler writes to, if configured."""

    for handler in logger.handlers:
        if isinstance(handler, PathRichHandler):
            return handler.console
    return None


@final
class ProgressDisplay:
    """Handles progress display in CLI."""

    def run_with_service(
        self,
        app: SyncServiceLike,
        request: SyncRequest,
        cancel_event: Event | None = None,
    ) -> list[SyncItemResult]:
        """Run an archive sync via the application service with a progress bar.

        Args:
            app: Application service instance used to orchestrate syncing.
            request: Sync operation parameters.
            cancel_event: Optional event that stops the run between archives.

        Returns:
            List of per-archive results.
        """
        progress_kwargs: dict[str, Any] = {
            "transient": True,
            "redirect_stdout": False,
            "redirect_stderr": False,
        }
        progress_console = logging_console()
        if progress_console is not None:
            progress_kwargs["console"] = progress_console

        with Progress(**progress_kwargs) as progress:
            task_id: TaskID | None = None
            last_count = 0

            def _cb(processed: int, total: int, current_archive: Path) -> None:
                nonlocal task_id, last_count
                if task_id is None:
                    task_id = progress.add_task("[cyan]Syncing packages...", total=total)
                advance = max(processed - last_count, 0)
                _ = progress.update(
                    task_id,
                    advance=advance,
                    description=f"[cyan]Syncing packages... {processed}/{total} {current_archive.name}",
                )
                last_count = processed

            return app.sync_archives(request, cancel_event, _cb)
