"""Configuration hierarchy — merges sources in priority order.

Precedence (later overrides earlier):
  1. Package defaults
  2. Global config   (~/.depcache/config.yaml)
  3. Project config   (./depcache.yaml)
  4. Environment variables (DEPCACHE_*)
  5. Runtime arguments

The YAML files that were actually loaded are reported under ``config_files``;
source-derived caches treat them as dependencies.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from depcache.config.defaults import get_defaults
from depcache.config.schema import CacheSettings

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".depcache" / "config.yaml"
_PROJECT_CONFIG_NAME = "depcache.yaml"

# Map of environment variables to config keys
_ENV_MAP: dict[str, str] = {
    "DEPCACHE_CACHE_DIR": "cache_dir",
    "DEPCACHE_CACHE_TIME": "cache_time",
    "DEPCACHE_DATA_DIR": "data_dir",
    "DEPCACHE_PARSER_FILES": "parser_files",
    "DEPCACHE_RENDERER_DIR": "renderer_dir",
    "DEPCACHE_LOG_LEVEL": "log_level",
}

# Keys that should be parsed as specific types
_TYPE_MAP: dict[str, type] = {
    "cache_time": float,
}

# Keys holding a list of paths, separated by os.pathsep in the environment
_PATH_LIST_KEYS = {"parser_files"}


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Load and merge configuration from all sources.

    Returns a merged dict with the final resolved values.
    """
    config = get_defaults()
    loaded: list[Path] = []

    # Layer 2: Global config
    global_cfg = _load_yaml_config(_GLOBAL_CONFIG_PATH)
    if global_cfg is not None:
        config.update(global_cfg)
        loaded.append(_GLOBAL_CONFIG_PATH)

    # Layer 3: Project config (search from cwd upward)
    project_path = _find_project_config()
    if project_path:
        project_cfg = _load_yaml_config(project_path)
        if project_cfg is not None:
            config.update(project_cfg)
            loaded.append(project_path)

    # Layer 4: Environment variables
    config.update(_load_env_vars())

    # Layer 5: Runtime arguments, only when explicitly set
    for key, value in runtime_overrides.items():
        if value is not None:
            config[key] = value

    config["config_files"] = loaded
    return config


def load_settings(**runtime_overrides: Any) -> CacheSettings:
    """Resolve the hierarchy into validated CacheSettings."""
    return CacheSettings(**load_config_hierarchy(**runtime_overrides))


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Load a YAML config file if it exists."""
    if not path.exists() or not path.is_file():
        return None
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
        if isinstance(data, dict):
            return data
        logger.warning("Config file %s is not a mapping, ignoring", path)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
    return None


def _find_project_config() -> Path | None:
    """Search for depcache.yaml from cwd upward."""
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / _PROJECT_CONFIG_NAME
        if candidate.exists():
            return candidate
    return None


def _load_env_vars() -> dict[str, Any]:
    """Read DEPCACHE_* environment variables."""
    result: dict[str, Any] = {}
    for env_key, config_key in _ENV_MAP.items():
        value = os.environ.get(env_key)
        if value is None:
            continue
        result[config_key] = _coerce_env_value(config_key, value)
    return result


def _coerce_env_value(key: str, value: str) -> Any:
    """Coerce an environment variable string to the appropriate type."""
    if key in _PATH_LIST_KEYS:
        return [Path(p) for p in value.split(os.pathsep) if p]

    target_type = _TYPE_MAP.get(key)
    if target_type:
        try:
            return target_type(value)
        except (ValueError, TypeError):
            logger.warning(
                "Cannot convert env var for '%s' to %s: %s", key, target_type.__name__, value
            )
            return value

    return value
