"""
Summary: Directory naming rules for packages placed in a levels directory.
Why: Keep destination names identical to the layout other level managers produce.
"""

import re
from typing import ClassVar, final


@final
class DirectoryNamer:
    """Build and clean package directory names."""

    # Control characters plus the characters Windows refuses in path components.
    INVALID_CHARACTERS: ClassVar[re.Pattern[str]] = re.compile(r'[\x00-\x1f<>:"/\\|?*]')

    # Current hex keys, e.g. ``1a2b``.
    KEY_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^[0-9a-fA-F]+$")

    # Legacy ``<song id>-<upload id>`` keys.
    LEGACY_KEY_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^\d+-(\d+)$")

    @classmethod
    def strip_invalid_characters(cls, text: str) -> str:
        """Remove every character that is invalid in a path component."""

        return cls.INVALID_CHARACTERS.sub("", text)

    @classmethod
    def package_directory_name(cls, key: str | None, name: str, author: str | None) -> str:
        """Build the directory name for a package.

        Args:
            key: Catalog key, may be empty.
            name: Song name.
            author: Level author name, may be empty.

        Returns:
            str: ``"{key} ({name} - {author})"``, dropping `` - {author}`` when the
            author is empty and the key wrapper when the key is empty, with invalid
            characters removed.
        """
        name_author = f"{name} - {author}" if author else name
        trimmed_key = key.strip() if key else ""
        base = f"{trimmed_key} ({name_author})" if trimmed_key else name_author
        return cls.strip_invalid_characters(base.strip())

    @classmethod
    def parse_key(cls, key: str | None) -> str | None:
        """Normalize a catalog key to its lowercase hex form.

        Legacy ``<n>-<m>`` keys map to the hex form of ``m``. Anything else is
        rejected with None.
        """
        if not key:
            return None
        candidate = key.strip()
        if cls.KEY_PATTERN.match(candidate):
            return candidate.lower()
        legacy = cls.LEGACY_KEY_PATTERN.match(candidate)
        if legacy:
            return format(int(legacy.group(1)), "x")
        return None


__all__ = ["DirectoryNamer"]
