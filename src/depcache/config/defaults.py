"""Package-level default configuration values."""

from __future__ import annotations

from pathlib import Path
from typing import Any

# Default cache settings
DEFAULT_CACHE_DIR = Path.home() / ".depcache" / "cache"
DEFAULT_CACHE_TIME = 60 * 60 * 24  # one day
DEFAULT_STATS_FILENAME = "cache_stats.txt"

# Default page data layout
DEFAULT_DATA_DIR = Path.home() / ".depcache" / "data"

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "cache_dir": DEFAULT_CACHE_DIR,
        "cache_time": DEFAULT_CACHE_TIME,
        "data_dir": DEFAULT_DATA_DIR,
        "parser_files": [],
        "renderer_dir": None,
        "log_level": DEFAULT_LOG_LEVEL,
    }
