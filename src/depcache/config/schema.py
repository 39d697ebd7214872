"""Pydantic model for resolved cache settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from depcache.config.defaults import (
    DEFAULT_CACHE_DIR,
    DEFAULT_CACHE_TIME,
    DEFAULT_DATA_DIR,
    DEFAULT_LOG_LEVEL,
    DEFAULT_STATS_FILENAME,
)


class CacheSettings(BaseModel):
    """Read-only configuration for one process lifetime."""

    cache_dir: Path = DEFAULT_CACHE_DIR
    cache_time: float = DEFAULT_CACHE_TIME
    data_dir: Path = DEFAULT_DATA_DIR
    parser_files: list[Path] = Field(default_factory=list)
    renderer_dir: Path | None = None
    log_level: str = DEFAULT_LOG_LEVEL
    config_files: list[Path] = Field(default_factory=list)

    @field_validator("cache_dir", "data_dir", "renderer_dir", mode="before")
    @classmethod
    def _expand_user(cls, value: object) -> object:
        if isinstance(value, str):
            return Path(value).expanduser()
        if isinstance(value, Path):
            return value.expanduser()
        return value

    @property
    def stats_file(self) -> Path:
        return self.cache_dir / DEFAULT_STATS_FILENAME

    def renderer_file(self, mode: str) -> Path | None:
        """File implementing the renderer for ``mode``, if a renderer dir is set."""
        if self.renderer_dir is None:
            return None
        return self.renderer_dir / f"{mode}.py"
