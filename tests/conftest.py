import os

import pytest

from depcache.cache.stats import StatisticsLedger
from depcache.cache.store import FileStore
from depcache.config import hierarchy
from depcache.config.schema import CacheSettings
from depcache.pages import PageStore

# Fixed reference time for mtime-driven tests
T0 = 1_000_000.0


def set_mtime(path, mtime: float) -> None:
    """Create ``path`` if needed and set its modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        path.write_text("x")
    os.utime(path, (mtime, mtime))


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's real config files and DEPCACHE_* env out of every test."""
    monkeypatch.setattr(hierarchy, "_GLOBAL_CONFIG_PATH", tmp_path / "no-global.yaml")
    for key in list(os.environ):
        if key.startswith("DEPCACHE_"):
            monkeypatch.delenv(key)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)


@pytest.fixture
def t0():
    return T0


@pytest.fixture
def touch():
    return set_mtime


@pytest.fixture
def clock():
    return lambda: T0 + 10


@pytest.fixture
def settings(tmp_path):
    return CacheSettings(
        cache_dir=tmp_path / "cache",
        data_dir=tmp_path / "data",
        cache_time=3600,
    )


@pytest.fixture
def store(settings):
    return FileStore(settings.cache_dir)


@pytest.fixture
def ledger(settings):
    return StatisticsLedger(settings.stats_file)


@pytest.fixture
def pages(settings):
    return PageStore(settings.data_dir)
