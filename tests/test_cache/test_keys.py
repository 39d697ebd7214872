"""Tests for cache key generation."""

import hashlib
from pathlib import Path

from depcache.cache.keys import cache_name, hash_key, source_key


class TestHashKey:
    def test_md5_hex(self):
        assert hash_key("wiki:start") == hashlib.md5(b"wiki:start").hexdigest()

    def test_deterministic(self):
        assert hash_key("a") == hash_key("a")

    def test_distinct_keys(self):
        assert hash_key("a") != hash_key("b")


class TestCacheName:
    def test_layout(self):
        digest = hash_key("wiki:start")
        path = cache_name(Path("/cache"), "wiki:start", ".xhtml")
        assert path == Path("/cache") / digest[0] / f"{digest}.xhtml"

    def test_extension_appended_verbatim(self):
        assert cache_name(Path("/c"), "k", "").name == hash_key("k")


class TestSourceKey:
    def test_combines_file_and_context(self):
        assert source_key(Path("/data/pages/start.txt"), "example.org", 443) == (
            "/data/pages/start.txtexample.org443"
        )

    def test_defaults_to_file_only(self):
        assert source_key("start.txt") == "start.txt"
