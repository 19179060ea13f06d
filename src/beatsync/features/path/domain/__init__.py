"""Path naming domain."""

from .directory_naming import DirectoryNamer

__all__ = ["DirectoryNamer"]
