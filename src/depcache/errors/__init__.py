"""Error handling — read, write and deserialization failures."""

from depcache.errors.exceptions import (
    CacheReadError,
    CacheWriteError,
    DepCacheError,
    DeserializationError,
)

__all__ = [
    "DepCacheError",
    "CacheReadError",
    "CacheWriteError",
    "DeserializationError",
]
