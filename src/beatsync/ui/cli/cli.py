"""Command line interface for beatsync."""

import sys
import threading
from typing import final

from beatsync.application.services import SyncRequest, SyncService
from beatsync.platform.logging import logger
from beatsync.ui.cli.args import ArgumentParser
from beatsync.ui.cli.args.options import AddArgs, CLIArgs, ScanArgs
from beatsync.ui.cli.display import ProgressDisplay, ResultDisplay


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(
        args_list: list[str] | None = None,
        service: SyncService | None = None,
    ) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
            service: Application service override (for testing).
        """
        cancel_event = threading.Event()
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)
            app = service or SyncService()

            if isinstance(args, ScanArgs):
                summary = app.scan(args.levels_path, cancel_event)
                ResultDisplay().show_scan_summary(summary, quiet=args.quiet)
                return

            assert isinstance(args, AddArgs)
            request = SyncRequest(
                levels_path=args.levels_path,
                archives=args.archives,
                unzip_packages=args.unzip_packages,
                overwrite_target=args.overwrite_target,
                playlist_path=args.playlist_path,
            )
            results = ProgressDisplay().run_with_service(app, request, cancel_event)
            ResultDisplay().show_sync_results(results, quiet=args.quiet)
            if any(not result.success for result in results):
                sys.exit(1)
            return

        except KeyboardInterrupt:
            cancel_event.set()
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Command processing calls
        ``sys.exit(...)`` on failures, so this return is only reached when
        processing completes successfully.
    """
    CommandProcessor.process_command()
    return 0
