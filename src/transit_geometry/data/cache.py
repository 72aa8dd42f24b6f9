"""Keyed TTL cache for transit API listings."""

import asyncio
import time
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class TTLCache(Generic[K, V]):
    """Keyed cache with time-based expiration per entry.

    Holds one async lock shared by all keys so callers can double-check
    the cache around a fetch without issuing duplicate requests.
    """

    def __init__(self, ttl: float = 300.0):
        """Initialize the cache.

        Args:
            ttl: Time-to-live in seconds for each entry.
        """
        self._ttl = ttl
        self._entries: dict[K, tuple[V, float]] = {}
        self._lock = asyncio.Lock()

    def get(self, key: K) -> V | None:
        """Return the value for key, or None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if time.monotonic() >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: K, value: V) -> None:
        """Store value for key, evicting any entries that have already expired."""
        now = time.monotonic()
        self._entries = {k: e for k, e in self._entries.items() if e[1] > now}
        self._entries[key] = (value, now + self._ttl)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def lock(self) -> asyncio.Lock:
        """Get the async lock for coordinating fetches."""
        return self._lock
