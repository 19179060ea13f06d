"""Package hashing use cases."""

from .content_hasher import ContentHasher
from .hash_index import HashIndex

__all__ = ["ContentHasher", "HashIndex"]
