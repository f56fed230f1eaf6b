"""In-process TTL cache for upstream API responses (GitHub repo list)."""

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from portfolio_site.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

T = TypeVar("T")


class CacheEntry:
    """A cached value with a monotonic expiry time."""

    __slots__ = ("value", "expires_at")

    def __init__(self, value: Any, expires_at: float):
        self.value = value
        self.expires_at = expires_at

    def is_expired(self, now: float | None = None) -> bool:
        return (now if now is not None else time.monotonic()) >= self.expires_at


class TTLCache:
    """Small async-safe key/value cache with per-entry TTL."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._entries: dict[str, CacheEntry] = {}
        self._lock = asyncio.Lock()
        self._clock = clock

    async def get(self, key: str) -> Any | None:
        """Return the cached value, or None if missing or expired."""
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                log_with_context(logger, "debug", "Cache expired", cache_key=key, event_type="cache_expired")
                return None
            return entry.value

    async def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        async with self._lock:
            self._entries[key] = CacheEntry(value, self._clock() + ttl_seconds)
        log_with_context(
            logger,
            "debug",
            "Cache set",
            cache_key=key,
            ttl_seconds=ttl_seconds,
            event_type="cache_set",
        )

    async def clear(self, key: str | None = None) -> None:
        """Clear one key, or the whole cache when key is None."""
        async with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)

    async def size(self) -> int:
        async with self._lock:
            return len(self._entries)


async def cached(
    cache: TTLCache,
    key: str,
    ttl_seconds: float,
    fetch_func: Callable[[], Awaitable[T]],
) -> T:
    """Return the cached value for key, fetching and storing it on a miss.

    A ttl of zero or less disables caching for the call. Failed fetches are
    not cached.
    """
    if ttl_seconds <= 0:
        return await fetch_func()

    cached_value = await cache.get(key)
    if cached_value is not None:
        log_with_context(logger, "debug", "Cache hit", cache_key=key, event_type="cache_hit")
        return cached_value

    log_with_context(logger, "debug", "Cache miss, fetching fresh data", cache_key=key, event_type="cache_miss")
    value = await fetch_func()
    await cache.set(key, value, ttl_seconds)
    return value


# Global cache instance
_cache = TTLCache()


def get_cache() -> TTLCache:
    """Get global cache instance."""
    return _cache
