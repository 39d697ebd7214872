"""Cache for artifacts derived from a source file by a processing mode."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from depcache.cache.base import Cache
from depcache.cache.hooks import PARSER_CACHE_USE
from depcache.cache.keys import source_key
from depcache.config.schema import CacheSettings
from depcache.types import DependencySpec, RequestContext


class ParserCache(Cache):
    """Output of processing ``file`` in ``mode``, optionally tied to a page id.

    Valid only while the source exists, the entry is younger than the
    configured cache time, and neither the source, the config files nor the
    parser implementation changed since it was written.
    """

    event = PARSER_CACHE_USE

    def __init__(
        self,
        page: str | None,
        file: Path | str,
        mode: str,
        *,
        settings: CacheSettings,
        context: RequestContext | None = None,
        **kwargs: Any,
    ) -> None:
        context = context or RequestContext()
        self.page = page or None
        self.file = Path(file)
        self.mode = mode
        self._settings = settings
        super().__init__(
            source_key(self.file, context.host, context.port),
            f".{mode}",
            context=context,
            **kwargs,
        )

    def _source_available(self) -> bool:
        return self._probe.exists(self.file)

    def _prepare(self, depends: DependencySpec) -> DependencySpec:
        depends = depends.with_default_age(self._settings.cache_time)
        return super()._prepare(depends.with_files(self._dependency_files()))

    def _dependency_files(self) -> list[Path]:
        return [
            self.file,
            *self._settings.config_files,
            *self._settings.parser_files,
        ]
