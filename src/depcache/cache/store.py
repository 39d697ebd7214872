"""File-backed store for cache entries and the file probe used for dependencies."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from depcache.cache.keys import cache_name
from depcache.errors.exceptions import CacheReadError, CacheWriteError

logger = logging.getLogger(__name__)


def clean_line_endings(data: bytes) -> bytes:
    """Normalize CRLF and lone CR to LF."""
    return data.replace(b"\r\n", b"\n").replace(b"\r", b"\n")


class FileProbe:
    """Existence and modification-time checks on plain files."""

    def exists(self, path: Path | str) -> bool:
        return os.path.exists(path)

    def mod_time(self, path: Path | str) -> float | None:
        """Modification time, or None when the file is missing or unreadable."""
        try:
            return os.stat(path).st_mtime
        except OSError:
            return None


class FileStore:
    """Maps (key, extension) to a file under ``cache_dir`` and reads/writes it."""

    def __init__(self, cache_dir: Path) -> None:
        self._cache_dir = Path(cache_dir)

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def resolve(self, key: str, ext: str) -> Path:
        return cache_name(self._cache_dir, key, ext)

    def read_all(self, location: Path, clean: bool = True) -> bytes:
        try:
            data = location.read_bytes()
        except FileNotFoundError as e:
            raise CacheReadError(f"No cached data at {location}", location, e) from e
        except OSError as e:
            raise CacheReadError(f"Cannot read cache file {location}: {e}", location, e) from e
        return clean_line_endings(data) if clean else data

    def write_all(self, location: Path, data: bytes | str) -> None:
        """Write ``data`` atomically; the previous content stays intact on failure."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        tmp_name: str | None = None
        try:
            location.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=location.parent, prefix=".tmp-")
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.chmod(tmp_name, _file_mode(location))
            os.replace(tmp_name, location)
        except OSError as e:
            if tmp_name is not None:
                _unlink_quietly(Path(tmp_name))
            raise CacheWriteError(f"Cannot write cache file {location}: {e}", location, e) from e

    def delete(self, location: Path) -> None:
        _unlink_quietly(location)

    def mod_time(self, location: Path) -> float | None:
        try:
            return location.stat().st_mtime
        except OSError:
            return None


def _file_mode(location: Path) -> int:
    """Mode for a new entry: keep an existing file's mode, else 0o666 minus the umask."""
    try:
        return stat.S_IMODE(location.stat().st_mode)
    except OSError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _unlink_quietly(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Failed to remove %s: %s", path, e)
