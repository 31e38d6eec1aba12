"""
Content caching package.

Provides the cache key deriver and the in-process cache store used by the
content loader to skip redundant content API calls. Draft content never
passes through here.
"""

from .keys import derive_cache_key
from .memory_cache import CacheStore, MemoryCache

__all__ = ["derive_cache_key", "CacheStore", "MemoryCache"]
