"""Command line argument handling package."""

from beatsync.ui.cli.args.parser import ArgumentParser
from beatsync.ui.cli.args.options import AddArgs, CLIArgs, ScanArgs

__all__ = ["AddArgs", "ArgumentParser", "CLIArgs", "ScanArgs"]
