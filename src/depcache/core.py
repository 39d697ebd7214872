"""Top-level entry point: DepCache, the long-lived owner of shared cache state."""

from __future__ import annotations

import copy
import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from depcache.cache.base import Cache
from depcache.cache.hooks import HookRegistry
from depcache.cache.instructions import InstructionsCache
from depcache.cache.parser import ParserCache
from depcache.cache.renderer import RendererCache
from depcache.cache.stats import LedgerRecord, StatisticsLedger
from depcache.cache.store import FileProbe, FileStore
from depcache.config.hierarchy import load_settings
from depcache.config.schema import CacheSettings
from depcache.pages import PageStore
from depcache.types import RequestContext

logger = logging.getLogger(__name__)


class DepCache:
    """Builds caches that share one store, statistics ledger, page store and hook registry.

    Create one per process (or per long-lived application context) and one
    cache object per artifact lookup.
    """

    def __init__(
        self,
        settings: CacheSettings | None = None,
        context: RequestContext | None = None,
        hooks: HookRegistry | None = None,
        clock: Callable[[], float] = time.time,
        **overrides: Any,
    ) -> None:
        if settings is None:
            settings = load_settings(**overrides)
        elif overrides:
            updates = {k: v for k, v in overrides.items() if v is not None}
            settings = CacheSettings.model_validate({**settings.model_dump(), **updates})
        self._settings = settings
        self._context = context or RequestContext()
        self._hooks = hooks or HookRegistry()
        self._clock = clock
        self._store = FileStore(self._settings.cache_dir)
        self._ledger = StatisticsLedger(self._settings.stats_file)
        self._pages = PageStore(self._settings.data_dir)
        self._probe = FileProbe()
        logger.debug("Cache directory: %s", self._settings.cache_dir)

    @property
    def settings(self) -> CacheSettings:
        return self._settings

    @property
    def context(self) -> RequestContext:
        return self._context

    @property
    def hooks(self) -> HookRegistry:
        return self._hooks

    @property
    def ledger(self) -> StatisticsLedger:
        return self._ledger

    @property
    def pages(self) -> PageStore:
        return self._pages

    def with_context(self, context: RequestContext) -> DepCache:
        """Same shared state, different request context."""
        clone = copy.copy(self)
        clone._context = context
        return clone

    def cache(self, key: str, ext: str) -> Cache:
        return Cache(key, ext, **self._common())

    def parser_cache(self, page: str | None, file: Path | str, mode: str) -> ParserCache:
        return ParserCache(page, file, mode, settings=self._settings, **self._common())

    def renderer_cache(self, page: str | None, file: Path | str, mode: str) -> RendererCache:
        return RendererCache(
            page, file, mode, settings=self._settings, pages=self._pages, **self._common()
        )

    def instructions_cache(self, page: str | None, file: Path | str) -> InstructionsCache:
        return InstructionsCache(page, file, settings=self._settings, **self._common())

    def stats(self) -> list[LedgerRecord]:
        return sorted(self._ledger.records(), key=lambda r: r.extension)

    def _common(self) -> dict[str, Any]:
        return {
            "store": self._store,
            "ledger": self._ledger,
            "hooks": self._hooks,
            "context": self._context,
            "probe": self._probe,
            "clock": self._clock,
        }
