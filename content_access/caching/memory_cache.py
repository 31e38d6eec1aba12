"""
In-process LRU cache with per-entry expiry.
"""

import asyncio
import copy
import time
from collections import OrderedDict
from typing import Any, Callable, Dict, Optional, Protocol, Tuple, runtime_checkable

from shared.logging import get_logger


@runtime_checkable
class CacheStore(Protocol):
    """Async key/value store the content loader reads and repopulates."""

    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None when absent or expired."""
        ...

    async def set(self, key: str, value: Any) -> None:
        """Store a value under key."""
        ...


class MemoryCache:
    """Bounded LRU cache; entries older than ``ttl_seconds`` read as absent.

    Values are copied in and out so callers mutating loaded content never
    change what later reads see.
    """

    def __init__(
        self,
        max_entries: int = 100,
        ttl_seconds: float = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self.logger = get_logger("content.cache")

        # key -> (expires_at, value), oldest first
        self._entries: "OrderedDict[str, Tuple[float, Any]]" = OrderedDict()
        self._lock = asyncio.Lock()

        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._expirations = 0

    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache."""
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            expires_at, value = entry
            if expires_at <= self._clock():
                del self._entries[key]
                self._expirations += 1
                self._misses += 1
                return None

            self._entries.move_to_end(key)
            self._hits += 1
            return copy.deepcopy(value)

    async def set(self, key: str, value: Any) -> None:
        """Set value in cache, evicting the least recently used entries when full."""
        async with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)

            self._entries[key] = (self._clock() + self.ttl_seconds, copy.deepcopy(value))

            while len(self._entries) > self.max_entries:
                evicted_key, _ = self._entries.popitem(last=False)
                self._evictions += 1
                self.logger.debug("Evicted cache entry", key=evicted_key)

    async def delete(self, key: str) -> bool:
        """Delete a key. Returns True if it was present."""
        async with self._lock:
            return self._entries.pop(key, None) is not None

    async def clear(self) -> None:
        """Drop every entry."""
        async with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        return {
            "size": len(self._entries),
            "max_entries": self.max_entries,
            "ttl_seconds": self.ttl_seconds,
            "hits": self._hits,
            "misses": self._misses,
            "evictions": self._evictions,
            "expirations": self._expirations,
        }
