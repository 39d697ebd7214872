"""Custom exception hierarchy for depcache."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class DepCacheError(Exception):
    """Base exception for all depcache errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class CacheReadError(DepCacheError):
    """Stored content could not be read back.

    Raised only by explicit retrieve calls; validity checks fold a missing
    or unreadable entry into a stale result instead.
    """

    def __init__(
        self,
        message: str = "",
        location: Path | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.location = location
        self.original = original


class DeserializationError(CacheReadError):
    """Stored bytes do not decode to the expected structured value.

    Callers typically treat this as a miss and recompute.
    """


class CacheWriteError(DepCacheError):
    """Content could not be written to the cache location. Not retried."""

    def __init__(
        self,
        message: str = "",
        location: Path | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.location = location
        self.original = original
