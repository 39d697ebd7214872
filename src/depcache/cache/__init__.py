"""Cache subsystem — file-backed entries with dependency-driven staleness."""

from depcache.cache.base import Cache
from depcache.cache.hooks import PARSER_CACHE_USE, HookRegistry, hook
from depcache.cache.instructions import InstructionsCache
from depcache.cache.keys import cache_name, hash_key, source_key
from depcache.cache.parser import ParserCache
from depcache.cache.renderer import RendererCache
from depcache.cache.stats import LedgerRecord, StatisticsLedger
from depcache.cache.store import FileProbe, FileStore

__all__ = [
    "Cache",
    "ParserCache",
    "RendererCache",
    "InstructionsCache",
    "FileStore",
    "FileProbe",
    "HookRegistry",
    "PARSER_CACHE_USE",
    "hook",
    "LedgerRecord",
    "StatisticsLedger",
    "cache_name",
    "hash_key",
    "source_key",
]
