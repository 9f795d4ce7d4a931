"""Unit tests for CacheStore."""

import threading
import time

import pytest

from hosted_translation.services import CacheStore


@pytest.fixture
def cache():
    """Provide a fresh cache instance for each test."""
    return CacheStore()


class TestCacheStore:
    """Tests validating TTL expiry and eviction."""

    def test_get_after_put_returns_value(self, cache):
        cache.put("prod/translations/en-fr", {"h": "a–b"}, ttl_ms=1000)

        assert cache.get("prod/translations/en-fr") == {"h": "a–b"}

    def test_get_missing_key_returns_none(self, cache):
        assert cache.get("prod/none") is None

    def test_expired_entry_is_evicted_on_read(self, cache):
        cache.put("prod/a", "value", ttl_ms=10)
        time.sleep(0.05)

        assert cache.get("prod/a") is None
        assert "prod/a" not in cache.keys()

    def test_none_value_is_evicted_on_read(self, cache):
        cache.put("prod/a", None, ttl_ms=1000)

        assert cache.get("prod/a") is None
        assert len(cache) == 0

    def test_put_overwrites(self, cache):
        cache.put("prod/a", "old", ttl_ms=1000)
        cache.put("prod/a", "new", ttl_ms=1000)

        assert cache.get("prod/a") == "new"

    def test_remove_and_clear(self, cache):
        cache.put("prod/a", "1", ttl_ms=1000)
        cache.put("prod/b", "2", ttl_ms=1000)

        cache.remove("prod/a")
        assert cache.keys() == ["prod/b"]

        cache.clear()
        assert len(cache) == 0

    def test_filter_keeps_matching_entries(self, cache):
        cache.put("prod/translations/en-fr", "1", ttl_ms=1000)
        cache.put("prod/users/x", "2", ttl_ms=1000)

        cache.filter(lambda key, entry: key.startswith("prod/translations"))

        assert cache.keys() == ["prod/translations/en-fr"]

    def test_concurrent_writers_do_not_lose_entries(self, cache):
        def write(prefix):
            for index in range(200):
                cache.put(f"{prefix}/{index}", index, ttl_ms=10_000)

        threads = [threading.Thread(target=write, args=(f"t{n}",)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(cache) == 800
