"""Cache key generation — stable on-disk names for (key, extension) pairs."""

from __future__ import annotations

import hashlib
from pathlib import Path


def hash_key(key: str) -> str:
    """MD5 hex digest of the logical key."""
    return hashlib.md5(key.encode("utf-8")).hexdigest()


def cache_name(cache_dir: Path, key: str, ext: str) -> Path:
    """Location of the entry for ``key`` with extension ``ext``.

    Entries are fanned out into sub-directories named by the first hex digit
    of the key hash, so no single directory grows unbounded.
    """
    digest = hash_key(key)
    return cache_dir / digest[0] / f"{digest}{ext}"


def source_key(file: Path | str, host: str = "", port: int | str = "") -> str:
    """Composite key for content derived from ``file`` within a request context.

    The same source yields distinct entries per host/port.
    """
    return f"{file}{host}{port}"
