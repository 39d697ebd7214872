"""Cache for rendered output, aware of link-target existence on pages."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from depcache.cache.parser import ParserCache
from depcache.pages import PageStore

logger = logging.getLogger(__name__)


class RendererCache(ParserCache):
    """Rendered output of a source file.

    On top of the parser dependencies it depends on the renderer for its mode
    and, for pages, on the page metadata. A page's render also goes stale when
    any page it links to was created or deleted since it was rendered.
    """

    def __init__(self, *args: Any, pages: PageStore, **kwargs: Any) -> None:
        self._pages = pages
        super().__init__(*args, **kwargs)

    def _dependency_files(self) -> list[Path]:
        files = super()._dependency_files()
        renderer = self._settings.renderer_file(self.mode)
        if renderer is not None:
            files.append(renderer)
        if self.page:
            files.append(self._pages.meta_file(self.page))
        return files

    def _semantic_check(self) -> bool:
        if not super()._semantic_check():
            return False
        if not self.page:
            return True

        for ref, existed in self._pages.references(self.page).items():
            if bool(existed) != self._pages.exists(ref):
                logger.debug("Link %s on %s changed existence", ref, self.page)
                return False
        return True
