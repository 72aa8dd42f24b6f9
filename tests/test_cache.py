"""Tests for the keyed TTL cache."""

import time

from transit_geometry.data.cache import TTLCache


def test_cache_ttl_expiration():
    """Entries should expire after the TTL."""
    cache: TTLCache[str, str] = TTLCache(ttl=0.1)

    cache.set("trip-1", "stops")
    assert cache.get("trip-1") == "stops"

    time.sleep(0.15)

    assert cache.get("trip-1") is None
    # expired entries are evicted on read
    assert len(cache) == 0


def test_cache_keys_are_independent():
    cache: TTLCache[str, list[int]] = TTLCache(ttl=10.0)

    cache.set("a", [1])
    cache.set("b", [2])

    assert cache.get("a") == [1]
    assert cache.get("b") == [2]
    assert cache.get("c") is None


def test_cache_clear():
    """Cache clear should remove every entry."""
    cache: TTLCache[str, str] = TTLCache(ttl=10.0)

    cache.set("a", "x")
    cache.set("b", "y")
    cache.clear()

    assert cache.get("a") is None
    assert len(cache) == 0


def test_cache_overwrite():
    """Setting a key again should overwrite the old value."""
    cache: TTLCache[str, str] = TTLCache(ttl=10.0)

    cache.set("a", "first")
    cache.set("a", "second")

    assert cache.get("a") == "second"


def test_expired_entries_evicted_on_set():
    """Writing a key should drop entries that expired under other keys."""
    cache: TTLCache[str, int] = TTLCache(ttl=0)

    for i in range(500):
        cache.set(f"trip-{i}", i)

    assert len(cache) <= 1


def test_set_keeps_live_entries():
    cache: TTLCache[str, str] = TTLCache(ttl=10.0)

    cache.set("a", "x")
    cache.set("b", "y")

    assert len(cache) == 2
    assert cache.ttl == 10.0
