"""Caching and invalidation engine."""

from .digest import DigestCache, DigestRecord
from .hasher import EntryHasher
from .materializer import durable_promote, promote
from .memory import MemoryCache
from .persisted import PersistedCache, persisted_cache_dir

__all__ = [
    "DigestCache",
    "DigestRecord",
    "EntryHasher",
    "MemoryCache",
    "PersistedCache",
    "durable_promote",
    "persisted_cache_dir",
    "promote",
]
