"""Tests for the path-aware Rich log handler."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from rich.console import Console

from beatsync.platform.logging import PathRichHandler, setup_logger


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("beatsync", logging.INFO, __file__, 1, "message", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_format_path_relative_to_base() -> None:
    assert PathRichHandler.format_path("/music/levels/pkg/info.dat", "/music/levels") == "pkg/info.dat"


def test_format_path_truncates_long_absolute_paths() -> None:
    assert PathRichHandler.format_path("/a/b/c/d/e/f") == "…/c/d/e/f"


def test_format_path_keeps_short_paths() -> None:
    assert PathRichHandler.format_path("/a/b") == "/a/b"


def test_format_path_preserves_windows_separator() -> None:
    assert PathRichHandler.format_path("C:\\Games\\Beat\\Custom\\Levels\\pkg") == "…\\Beat\\Custom\\Levels\\pkg"


def test_describe_context_includes_event_and_paths() -> None:
    handler = PathRichHandler()
    record = _record(
        sync_event="transfer.success",
        target_path=Path("/levels/pkg"),
        base_path=Path("/levels"),
    )

    assert handler.describe_context(record) == "[transfer.success] dest=pkg"


def test_describe_context_empty_without_extras() -> None:
    assert PathRichHandler().describe_context(_record()) == ""


def test_rendered_line_contains_context() -> None:
    buffer = io.StringIO()
    handler = PathRichHandler(console=Console(file=buffer, width=200))
    record = _record(sync_event="transfer.start", source_path="/in/a.zip")
    record.msg = "Transferring"

    handler.emit(record)

    output = buffer.getvalue()
    assert "Transferring" in output
    assert "[transfer.start] src=/in/a.zip" in output


def test_setup_logger_adds_rotating_file_handler(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "beatsync.log"
    try:
        logger = setup_logger(log_file=log_file)
        handler_types = [type(handler).__name__ for handler in logger.handlers]
        logger.info("written")

        assert handler_types == ["PathRichHandler", "RotatingFileHandler"]
        assert "written" in log_file.read_text(encoding="utf-8")
    finally:
        _ = setup_logger()
