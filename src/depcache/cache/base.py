"""Generic file-backed cache with dependency-driven staleness checks."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from depcache.cache.hooks import HookRegistry
from depcache.cache.stats import StatisticsLedger
from depcache.cache.store import FileProbe, FileStore
from depcache.types import DependencySpec, RequestContext

logger = logging.getLogger(__name__)


class Cache:
    """A single cached artifact identified by (key, ext).

    Callers ask ``check_valid()`` once, and on a miss recompute the artifact
    themselves and hand it to ``store()``. The cache never recomputes.

    Subclasses specialize the decision by overriding the narrow steps used by
    ``is_valid()``: ``_source_available``, ``_prepare`` and ``_semantic_check``.
    Override those rather than ``check_valid``, which owns hook dispatch and
    statistics.
    """

    # Hook event fired around the validity decision; None disables hooks
    event: str | None = None

    def __init__(
        self,
        key: str,
        ext: str,
        *,
        store: FileStore,
        ledger: StatisticsLedger,
        hooks: HookRegistry | None = None,
        context: RequestContext | None = None,
        probe: FileProbe | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if "," in ext or "\n" in ext:
            raise ValueError(f"Cache extension may not contain ',' or newlines: {ext!r}")
        self.key = key
        self.ext = ext
        self._store = store
        self._ledger = ledger
        self._hooks = hooks
        self._context = context or RequestContext()
        self._probe = probe or FileProbe()
        self._clock = clock
        self.location: Path = store.resolve(key, ext)
        self.last_write_time: float | None = None
        self.depends = DependencySpec()
        self._caller_depends = self.depends

    @property
    def context(self) -> RequestContext:
        return self._context

    def check_valid(self, depends: DependencySpec | None = None) -> bool:
        """Decide whether the stored artifact can be used, and record the attempt.

        Supported dependencies: ``max_age`` (seconds) and ``files`` (the cache
        must be newer than each of them).
        """
        self._caller_depends = self.depends = depends or DependencySpec()

        if self.event and self._hooks is not None and self._hooks.has_handlers(self.event):
            result = self._hooks.invoke(self.event, self, self._use_default)
        else:
            result = self._use_default()

        return self._ledger.record(self.ext, result)

    def is_valid(self, depends: DependencySpec) -> bool:
        """The validity decision; first failing check wins."""
        if self._context.purge:
            return self._stale("purge requested")

        self.last_write_time = self._store.mod_time(self.location)
        if self.last_write_time is None:
            return self._stale("no cached entry")

        if not self._source_available():
            return self._stale("source missing")

        depends = self._prepare(depends)
        self.depends = depends

        if depends.max_age and self._clock() - self.last_write_time > depends.max_age:
            return self._stale(f"older than {depends.max_age}s")

        for file in depends.files:
            mtime = self._probe.mod_time(file)
            if mtime is not None and mtime > self.last_write_time:
                return self._stale(f"dependency {file} is newer")

        if not self._semantic_check():
            return self._stale("semantic check failed")

        return True

    def retrieve(self, clean: bool = True) -> bytes:
        """Return the cached data, with line endings normalized when ``clean``."""
        return self._store.read_all(self.location, clean)

    def store(self, data: bytes | str) -> None:
        self._store.write_all(self.location, data)

    def remove(self) -> None:
        """Remove any cached data for this entry; a missing entry is fine."""
        self._store.delete(self.location)

    # -- specialization points --

    def _source_available(self) -> bool:
        return True

    def _prepare(self, depends: DependencySpec) -> DependencySpec:
        """Return the effective dependencies; subclasses add their own."""
        return depends

    def _semantic_check(self) -> bool:
        return True

    def _use_default(self) -> bool:
        return self.is_valid(self._caller_depends)

    def _stale(self, reason: str) -> bool:
        logger.debug("Cache %s%s stale: %s", self.key, self.ext, reason)
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self.key!r}, ext={self.ext!r})"
