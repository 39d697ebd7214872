"""depcache — dependency-driven, file-backed artifact cache."""

from depcache.cache import (
    Cache,
    HookRegistry,
    InstructionsCache,
    ParserCache,
    RendererCache,
    StatisticsLedger,
)
from depcache.core import DepCache
from depcache.types import DependencySpec, Instruction, RequestContext

__version__ = "0.1.0"

__all__ = [
    "DepCache",
    "Cache",
    "ParserCache",
    "RendererCache",
    "InstructionsCache",
    "HookRegistry",
    "StatisticsLedger",
    "DependencySpec",
    "Instruction",
    "RequestContext",
]
