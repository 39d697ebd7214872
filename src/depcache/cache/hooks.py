"""Hook registry — lets callers wrap or override cache validity decisions."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from depcache.cache.base import Cache

logger = logging.getLogger(__name__)

# Event fired by every cache derived from a source file
PARSER_CACHE_USE = "PARSER_CACHE_USE"

DefaultAction = Callable[[], bool]
HookHandler = Callable[["Cache", DefaultAction], bool]


class HookRegistry:
    """Per-event chains of validity handlers.

    A handler receives the cache and a zero-argument callable that runs the
    rest of the chain (ending in the cache's own decision). It may call it,
    ignore it, or invert its result; whatever it returns is coerced to bool.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[HookHandler]] = {}

    def register(self, event: str, handler: HookHandler) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def unregister(self, event: str, handler: HookHandler) -> None:
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def has_handlers(self, event: str) -> bool:
        return bool(self._handlers.get(event))

    def invoke(self, event: str, cache: Cache, default: DefaultAction) -> bool:
        """Run the handler chain for ``event``, falling back to ``default``."""
        handlers = list(self._handlers.get(event, []))

        def run(index: int) -> bool:
            if index >= len(handlers):
                return bool(default())
            handler = handlers[index]
            result = handler(cache, lambda: run(index + 1))
            logger.debug("Hook %s for %r returned %r", event, cache, result)
            return bool(result)

        return run(0)


def hook(registry: HookRegistry, event: str) -> Callable[[HookHandler], HookHandler]:
    """Decorator to register a validity handler on ``registry``."""

    def decorator(fn: HookHandler) -> HookHandler:
        registry.register(event, fn)
        return fn

    return decorator
