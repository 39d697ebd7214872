"""Cache for parsed instruction lists, stored as JSON."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from depcache.cache.parser import ParserCache
from depcache.errors.exceptions import DeserializationError
from depcache.types import Instruction

_INSTRUCTIONS = TypeAdapter(list[Instruction])

INSTRUCTIONS_MODE = "i"


class InstructionsCache(ParserCache):
    """Parser cache whose payload is a list of Instructions."""

    def __init__(self, page: str | None, file: Path | str, **kwargs: Any) -> None:
        super().__init__(page, file, INSTRUCTIONS_MODE, **kwargs)

    def retrieve(self, clean: bool = False) -> list[Instruction]:  # type: ignore[override]
        """Decode the stored instructions; empty content is an empty list.

        Raises DeserializationError when the content is not a valid instruction list.
        """
        contents = super().retrieve(clean)
        if not contents.strip():
            return []
        try:
            return _INSTRUCTIONS.validate_json(contents)
        except ValidationError as e:
            raise DeserializationError(
                f"Corrupt instruction cache {self.location}", self.location, e
            ) from e

    def store(self, instructions: list[Instruction]) -> None:  # type: ignore[override]
        super().store(_INSTRUCTIONS.dump_json(instructions))
