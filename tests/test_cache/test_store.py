"""Tests for the file-backed store and file probe."""

import os
import stat

import pytest

from depcache.cache.store import FileProbe, FileStore, clean_line_endings
from depcache.errors.exceptions import CacheReadError, CacheWriteError


class TestCleanLineEndings:
    def test_crlf_and_cr(self):
        assert clean_line_endings(b"a\r\nb\rc\nd") == b"a\nb\nc\nd"

    def test_untouched_when_clean(self):
        assert clean_line_endings(b"a\nb\n") == b"a\nb\n"


class TestFileStore:
    def test_resolve_under_cache_dir(self, tmp_path):
        store = FileStore(tmp_path)
        location = store.resolve("k", ".x")
        assert location.is_relative_to(tmp_path)
        assert store.cache_dir == tmp_path

    def test_write_creates_directories(self, tmp_path):
        store = FileStore(tmp_path / "deep")
        location = store.resolve("k", ".x")
        store.write_all(location, b"data")
        assert location.read_bytes() == b"data"

    def test_write_leaves_no_temp_files(self, tmp_path):
        store = FileStore(tmp_path)
        location = store.resolve("k", ".x")
        store.write_all(location, "one")
        store.write_all(location, "two")
        assert [p.name for p in location.parent.iterdir()] == [location.name]

    def test_new_file_mode_follows_umask(self, tmp_path):
        store = FileStore(tmp_path)
        location = store.resolve("k", ".x")
        old = os.umask(0o022)
        try:
            store.write_all(location, b"data")
        finally:
            os.umask(old)
        assert stat.S_IMODE(location.stat().st_mode) == 0o644

    def test_rewrite_keeps_existing_mode(self, tmp_path):
        store = FileStore(tmp_path)
        location = store.resolve("k", ".x")
        store.write_all(location, b"old")
        os.chmod(location, 0o640)
        store.write_all(location, b"new")
        assert stat.S_IMODE(location.stat().st_mode) == 0o640
        assert location.read_bytes() == b"new"

    def test_write_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = FileStore(blocker)
        with pytest.raises(CacheWriteError):
            store.write_all(store.resolve("k", ".x"), b"data")

    def test_read_missing(self, tmp_path):
        store = FileStore(tmp_path)
        with pytest.raises(CacheReadError) as exc_info:
            store.read_all(store.resolve("k", ".x"))
        assert isinstance(exc_info.value.original, FileNotFoundError)

    def test_read_clean_flag(self, tmp_path):
        store = FileStore(tmp_path)
        location = store.resolve("k", ".x")
        store.write_all(location, b"a\r\n")
        assert store.read_all(location) == b"a\n"
        assert store.read_all(location, clean=False) == b"a\r\n"

    def test_delete_idempotent(self, tmp_path):
        store = FileStore(tmp_path)
        location = store.resolve("k", ".x")
        store.write_all(location, b"data")
        store.delete(location)
        store.delete(location)
        assert not location.exists()

    def test_mod_time(self, tmp_path, touch, t0):
        store = FileStore(tmp_path)
        location = store.resolve("k", ".x")
        assert store.mod_time(location) is None
        touch(location, t0)
        assert store.mod_time(location) == t0


class TestFileProbe:
    def test_exists_and_mod_time(self, tmp_path, touch, t0):
        probe = FileProbe()
        path = tmp_path / "f.txt"
        assert not probe.exists(path)
        assert probe.mod_time(path) is None
        touch(path, t0)
        assert probe.exists(path)
        assert probe.mod_time(path) == t0
