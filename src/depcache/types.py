"""Shared Pydantic models for depcache."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class DependencySpec(BaseModel):
    """Dependencies supplied to a single validity check.

    max_age: seconds; None means "not set by the caller", 0 disables the check.
    files: cache is stale if any of these was modified after it.
    """

    max_age: float | None = None
    files: list[Path] = Field(default_factory=list)

    def with_files(self, extra: list[Path]) -> DependencySpec:
        """Return a copy with ``extra`` placed ahead of the existing files."""
        return self.model_copy(update={"files": [*extra, *self.files]})

    def with_default_age(self, max_age: float) -> DependencySpec:
        if self.max_age is not None:
            return self
        return self.model_copy(update={"max_age": max_age})


class RequestContext(BaseModel):
    """Per-request inputs the cache reads but does not own."""

    purge: bool = False
    host: str = ""
    port: int | str = ""


class Instruction(BaseModel):
    """One parsed instruction: handler name, its arguments, source offset."""

    name: str
    args: list[Any] = Field(default_factory=list)
    pos: int | None = None
