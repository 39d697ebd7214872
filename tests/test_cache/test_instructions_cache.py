"""Tests for InstructionsCache — structured payload storage."""

import pytest

from depcache.cache.instructions import InstructionsCache
from depcache.errors.exceptions import CacheReadError, DeserializationError
from depcache.types import Instruction


@pytest.fixture
def make_instructions(tmp_path, settings, store, ledger):
    source = tmp_path / "start.txt"
    source.write_text("====== Start ======")

    def factory(page="start"):
        return InstructionsCache(page, source, settings=settings, store=store, ledger=ledger)

    return factory


class TestInstructionsCache:
    def test_mode_and_ext(self, make_instructions):
        cache = make_instructions()
        assert cache.mode == "i"
        assert cache.ext == ".i"

    def test_round_trip(self, make_instructions):
        instructions = [
            Instruction(name="document_start"),
            Instruction(name="header", args=["Start", 1, 0], pos=1),
            Instruction(name="cdata", args=["text with\r\nline ending"], pos=20),
            Instruction(name="plugin", args=[{"nested": [1, 2, None]}, True], pos=33),
            Instruction(name="document_end"),
        ]
        cache = make_instructions()
        cache.store(instructions)
        assert cache.retrieve() == instructions

    def test_empty_list_round_trip(self, make_instructions):
        cache = make_instructions()
        cache.store([])
        assert cache.retrieve() == []

    def test_empty_file_is_empty_list(self, make_instructions):
        cache = make_instructions()
        cache.location.parent.mkdir(parents=True, exist_ok=True)
        cache.location.write_bytes(b"")
        assert cache.retrieve() == []

    @pytest.mark.parametrize("payload", [b"not json", b'{"name": "header"}', b'[{"args": []}]'])
    def test_corrupt_payload_raises(self, make_instructions, payload):
        cache = make_instructions()
        cache.location.parent.mkdir(parents=True, exist_ok=True)
        cache.location.write_bytes(payload)
        with pytest.raises(DeserializationError) as exc_info:
            cache.retrieve()
        assert exc_info.value.location == cache.location

    def test_deserialization_error_is_a_read_error(self):
        assert issubclass(DeserializationError, CacheReadError)

    def test_missing_entry_raises_read_error(self, make_instructions):
        with pytest.raises(CacheReadError):
            make_instructions().retrieve()

    def test_validity_uses_parser_rules(self, make_instructions):
        cache = make_instructions()
        assert cache.check_valid() is False
        cache.store([Instruction(name="document_start")])
        assert cache.check_valid() is True
