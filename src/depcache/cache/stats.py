"""Cache hit statistics — per-extension attempt/success counters on disk."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class LedgerRecord(BaseModel):
    """Counters for one cache extension."""

    extension: str
    attempts: int = 0
    successes: int = 0

    @property
    def misses(self) -> int:
        return self.attempts - self.successes

    @property
    def hit_rate(self) -> float:
        return self.successes / self.attempts if self.attempts > 0 else 0.0

    def to_line(self) -> str:
        return f"{self.extension},{self.attempts},{self.successes}"


class StatisticsLedger:
    """Attempt/success counters per extension, persisted as ``ext,attempts,successes`` lines.

    The file is read once, on first use, and rewritten in full after every
    recorded attempt. Concurrent processes sharing the file are last-writer-wins.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._records: dict[str, LedgerRecord] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def record(self, extension: str, success: bool) -> bool:
        """Count one attempt for ``extension`` and persist. Returns ``success`` unchanged."""
        records = self._load()
        entry = records.get(extension)
        if entry is None:
            entry = records[extension] = LedgerRecord(extension=extension)
        entry.attempts += 1
        if success:
            entry.successes += 1
        self.flush()
        return success

    def get(self, extension: str) -> LedgerRecord:
        entry = self._load().get(extension)
        if entry is None:
            return LedgerRecord(extension=extension)
        return entry.model_copy()

    def records(self) -> list[LedgerRecord]:
        return [r.model_copy() for r in self._load().values()]

    def flush(self) -> None:
        """Rewrite the whole ledger file. Failures are logged, never raised."""
        records = self._load()
        content = "\n".join(r.to_line() for r in records.values())
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.warning("Failed to write cache statistics %s: %s", self._path, e)

    def _load(self) -> dict[str, LedgerRecord]:
        if self._records is None:
            self._records = _read_ledger(self._path)
        return self._records


def _read_ledger(path: Path) -> dict[str, LedgerRecord]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read cache statistics %s, starting fresh: %s", path, e)
        return {}

    records: dict[str, LedgerRecord] = {}
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        entry = _parse_line(line)
        if entry is None:
            logger.warning("Skipping malformed statistics line %d in %s: %r", lineno, path, line)
            continue
        records[entry.extension] = entry
    return records


def _parse_line(line: str) -> LedgerRecord | None:
    parts = line.split(",")
    if len(parts) != 3:
        return None
    extension, attempts, successes = parts
    try:
        return LedgerRecord(
            extension=extension, attempts=int(attempts), successes=int(successes)
        )
    except ValueError:
        return None
