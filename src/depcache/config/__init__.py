"""Configuration — defaults, layered YAML/env hierarchy, validated settings."""

from depcache.config.hierarchy import load_config_hierarchy, load_settings
from depcache.config.schema import CacheSettings

__all__ = ["CacheSettings", "load_config_hierarchy", "load_settings"]
