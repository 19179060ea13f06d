"""Rich console handler that renders structured path extras compactly.

Where: platform/logging/handlers.py
What: Append sync event and path context to console log lines.
Why: Keep console output readable when paths sit deep inside a levels directory.
"""

from __future__ import annotations

import logging
from typing import Final

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.text import Text

_ELLIPSIS: Final[str] = "…"
_TAIL_SEGMENTS: Final[int] = 4
_PATH_FIELDS: Final[tuple[tuple[str, str], ...]] = (
    ("source_path", "src"),
    ("target_path", "dest"),
)


class PathRichHandler(RichHandler):
    """RichHandler that relativizes ``source_path``/``target_path`` extras."""

    def __init__(self, *args: object, **kwargs: object) -> None:
        kwargs.setdefault("show_path", False)
        kwargs.setdefault("markup", False)
        super().__init__(*args, **kwargs)  # pyright: ignore[reportArgumentType]

    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        rendered = super().render_message(record, message)
        details = self.describe_context(record)
        if not details:
            return rendered
        base = rendered if isinstance(rendered, Text) else Text(str(rendered))
        if base.plain:
            return Text.assemble(base, " ", Text(details, style="white"))
        return Text(details, style="white")

    def describe_context(self, record: logging.LogRecord) -> str:
        """Return a compact ``[event] src=… dest=…`` string for ``record``."""

        parts: list[str] = []
        event = getattr(record, "sync_event", None)
        if event:
            parts.append(f"[{event}]")
        base_path = getattr(record, "base_path", None)
        for attribute, label in _PATH_FIELDS:
            value = getattr(record, attribute, None)
            if value:
                parts.append(f"{label}={self.format_path(value, base_path)}")
        return " ".join(parts)

    @staticmethod
    def format_path(path: object, base_path: object | None = None) -> str:
        """Render ``path`` relative to ``base_path`` or as a truncated tail."""

        text = str(path)
        separator = "\\" if "\\" in text and "/" not in text else "/"

        if base_path:
            base = str(base_path).rstrip("/\\")
            if text.startswith(base) and len(text) > len(base) and text[len(base)] in "/\\":
                return text[len(base) + 1 :]

        segments = [segment for segment in text.split(separator) if segment]
        if len(segments) <= _TAIL_SEGMENTS:
            return text
        return _ELLIPSIS + separator + separator.join(segments[-_TAIL_SEGMENTS:])


__all__ = ["PathRichHandler"]
