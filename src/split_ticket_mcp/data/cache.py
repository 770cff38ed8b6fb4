"""Simple TTL-based cache for provider lookups."""

import time
from collections.abc import Hashable
from typing import Generic, TypeVar

T = TypeVar("T")


class LookupCache(Generic[T]):
    """Keyed TTL cache with a bounded number of entries.

    Expired entries are dropped lazily on access; when the cache is full the
    oldest entry is evicted.
    """

    def __init__(self, ttl: float = 300.0, max_entries: int = 512):
        """Initialize the cache.

        Args:
            ttl: Time-to-live in seconds for cached values.
            max_entries: Maximum number of keys kept at once.
        """
        self._ttl = ttl
        self._max_entries = max_entries
        self._entries: dict[Hashable, tuple[float, T]] = {}

    def get(self, key: Hashable) -> T | None:
        """Get the cached value for a key if it hasn't expired.

        Returns:
            The cached value if valid, None if expired or not set.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if time.monotonic() >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: Hashable, value: T) -> None:
        """Set a value in the cache with TTL."""
        if key not in self._entries and len(self._entries) >= self._max_entries:
            # dicts keep insertion order
            oldest = next(iter(self._entries))
            del self._entries[oldest]
        self._entries[key] = (time.monotonic() + self._ttl, value)

    def clear(self) -> None:
        """Clear all cached values."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
