"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from maccompat.core.models.settings import Settings
from maccompat.core.persistence.cache_store import CacheStore
from tests.helpers import FEED_URL, feed_bytes


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """A not-yet-created cache directory."""
    return tmp_path / "sofa"


@pytest.fixture
def settings(cache_dir: Path) -> Settings:
    return Settings(feed_url=FEED_URL, cache_dir=cache_dir, timeout=5)


@pytest.fixture
def store(cache_dir: Path) -> CacheStore:
    return CacheStore(cache_dir)


@pytest.fixture
def primed_store(store: CacheStore) -> CacheStore:
    """A cache holding a valid feed and its ETag."""
    store.ensure_directory()
    store.store_body(feed_bytes(["15.1", "14.7"], {"Mac14,2": ["15.1", "14.7"]}))
    store.store_token('"etag-1"')
    return store


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the developer's environment and config out of tests."""
    for var in (
        "MACCOMPAT_CONFIG",
        "MACCOMPAT_FEED_URL",
        "MACCOMPAT_CACHE_DIR",
        "MACCOMPAT_USER_AGENT",
        "MACCOMPAT_TIMEOUT",
        "MACCOMPAT_LOG_LEVEL",
        "MACCOMPAT_LOG_FILE",
        "MACCOMPAT_LOG_FILE_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
