"""Transfer use cases."""

from .archive_extractor import copy_stream, extract_archive
from .directory_target import DirectoryTarget
from .ports import HashCollectionPort, HistoryPort, PlaylistPort

__all__ = [
    "DirectoryTarget",
    "HashCollectionPort",
    "HistoryPort",
    "PlaylistPort",
    "copy_stream",
    "extract_archive",
]
