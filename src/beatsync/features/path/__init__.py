# Path: `src/beatsync/features/path/__init__.py`
# Summary: Export path feature domain symbols.
# Why: Provide a stable import surface for transfer targets and tests.

from .domain.directory_naming import DirectoryNamer

__all__ = ["DirectoryNamer"]
