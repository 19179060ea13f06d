"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from beatsync.config.config import Config
from beatsync.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from beatsync.ui.cli.args.options import AddArgs, CLIArgs, ScanArgs


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            description="beatsync - Keep a custom levels directory free of duplicate packages.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        scan_parser = subparsers.add_parser(
            "scan",
            help="Hash every package in a levels directory and report duplicates",
        )
        _ = scan_parser.add_argument(
            "levels_path",
            type=str,
            nargs="?",
            help="Levels directory to scan (defaults to the configured levels_path)",
            metavar="LEVELS_PATH",
        )
        ArgumentParser._add_verbosity_flags(scan_parser)

        add_parser = subparsers.add_parser(
            "add",
            help="Sync local package archives into a levels directory",
        )
        _ = add_parser.add_argument(
            "archives",
            type=str,
            nargs="+",
            help="Package archives to sync",
            metavar="ARCHIVE",
        )
        _ = add_parser.add_argument(
            "--levels",
            type=str,
            help="Levels directory receiving packages (defaults to the configured levels_path)",
            metavar="LEVELS_PATH",
        )
        _ = add_parser.add_argument(
            "--no-unzip",
            action="store_true",
            help="Store packages as .zip files instead of expanding them",
        )
        _ = add_parser.add_argument(
            "--overwrite",
            action="store_true",
            help="Replace existing destinations instead of choosing a free name",
        )
        _ = add_parser.add_argument(
            "--playlist",
            type=str,
            help="Playlist file that receives synced packages",
            metavar="PLAYLIST_FILE",
        )
        ArgumentParser._add_verbosity_flags(add_parser)

        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If required paths don't exist or other validation fails.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        # Set log level based on verbosity flags
        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        configuration = Config.load()
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        command: str = parsed_args.command

        if command == "scan":
            return ArgumentParser._process_scan(parsed_args, configuration)

        if command == "add":
            return ArgumentParser._process_add(parsed_args, configuration)

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def _add_verbosity_flags(parser: argparse.ArgumentParser) -> None:
        _ = parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed processing information",
        )
        _ = parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def _resolve_levels_path(raw: str | None, configuration: Config) -> Path:
        if raw:
            levels_path = Path(raw).expanduser()
        elif configuration.levels_path is not None:
            levels_path = configuration.levels_path
        else:
            logger.error("No levels directory given and none configured")
            sys.exit(1)

        if not levels_path.is_dir():
            logger.error("Levels directory does not exist: %s", levels_path)
            sys.exit(1)
        return levels_path.resolve()

    @staticmethod
    def _process_scan(parsed_args: argparse.Namespace, configuration: Config) -> ScanArgs:
        return ScanArgs(
            command="scan",
            levels_path=ArgumentParser._resolve_levels_path(parsed_args.levels_path, configuration),
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )

    @staticmethod
    def _process_add(parsed_args: argparse.Namespace, configuration: Config) -> AddArgs:
        levels_path = ArgumentParser._resolve_levels_path(parsed_args.levels, configuration)

        archives = tuple(Path(raw).expanduser() for raw in parsed_args.archives)
        missing = [archive for archive in archives if not archive.is_file()]
        if missing:
            for archive in missing:
                logger.error("Archive does not exist: %s", archive)
            sys.exit(1)

        if parsed_args.playlist:
            playlist_path: Path | None = Path(parsed_args.playlist).expanduser()
        else:
            playlist_path = configuration.playlist_path

        return AddArgs(
            command="add",
            archives=archives,
            levels_path=levels_path,
            unzip_packages=configuration.unzip_packages and not parsed_args.no_unzip,
            overwrite_target=configuration.overwrite_target or parsed_args.overwrite,
            playlist_path=playlist_path,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )
