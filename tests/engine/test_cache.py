import logging

import pytest
from pyroost.engine.cache import MemoryCache, NullCache, safe_read, safe_write
from pyroost.interfaces.storage import CacheAdapter


class BrokenCache(CacheAdapter):
    def read(self, key):
        raise OSError("disk gone")

    def write(self, key, value):
        raise OSError("disk gone")


def test_memory_cache_round_trip():
    cache = MemoryCache()
    cache.write("people/ara@1", {"name": "Ara"})

    assert cache.read("people/ara@1") == {"name": "Ara"}
    assert cache.read("people/ara@2") is None
    assert "people/ara@1" in cache

    cache.clear()
    assert len(cache) == 0


def test_memory_cache_evicts_least_recently_used():
    cache = MemoryCache(max_entries=2)
    cache.write("a", 1)
    cache.write("b", 2)
    cache.read("a")
    cache.write("c", 3)

    assert len(cache) == 2
    assert "b" not in cache
    assert cache.read("a") == 1
    assert cache.read("c") == 3


def test_memory_cache_rewrite_does_not_grow():
    cache = MemoryCache(max_entries=2)
    for _ in range(5):
        cache.write("a", 1)

    assert len(cache) == 1


def test_memory_cache_size_must_be_positive():
    with pytest.raises(ValueError, match="max_entries"):
        MemoryCache(max_entries=0)


def test_null_cache_never_hits():
    cache = NullCache()
    cache.write("a", 1)

    assert cache.read("a") is None


def test_safe_helpers_tolerate_missing_and_broken_caches(caplog):
    caplog.set_level(logging.WARNING, logger="pyroost.engine.cache")

    assert safe_read(None, "a") is None
    assert safe_write(None, "a", 1) is False
    assert safe_read(BrokenCache(), "a") is None
    assert safe_write(BrokenCache(), "a", 1) is False
    assert caplog.text.count("disk gone") == 2
