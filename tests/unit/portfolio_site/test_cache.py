"""Unit tests for the TTL cache."""

from unittest.mock import AsyncMock

import pytest

from portfolio_site.cache import TTLCache, cached


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.mark.asyncio
async def test_set_and_get():
    cache = TTLCache()

    await cache.set("key", {"value": 1}, ttl_seconds=60)

    assert await cache.get("key") == {"value": 1}
    assert await cache.size() == 1


@pytest.mark.asyncio
async def test_entry_expires():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    await cache.set("key", "value", ttl_seconds=10)

    clock.now += 9.9
    assert await cache.get("key") == "value"

    clock.now += 0.1
    assert await cache.get("key") is None
    assert await cache.size() == 0


@pytest.mark.asyncio
async def test_clear_single_key_and_all():
    cache = TTLCache()
    await cache.set("a", 1, ttl_seconds=60)
    await cache.set("b", 2, ttl_seconds=60)

    await cache.clear("a")
    assert await cache.get("a") is None
    assert await cache.get("b") == 2

    await cache.clear()
    assert await cache.size() == 0


@pytest.mark.asyncio
async def test_cached_fetches_once_within_ttl():
    cache = TTLCache()
    fetch = AsyncMock(return_value=["repo"])

    first = await cached(cache, "repos", 600, fetch)
    second = await cached(cache, "repos", 600, fetch)

    assert first == second == ["repo"]
    fetch.assert_awaited_once()


@pytest.mark.asyncio
async def test_cached_refetches_after_expiry():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    fetch = AsyncMock(side_effect=[["old"], ["new"]])

    assert await cached(cache, "repos", 600, fetch) == ["old"]
    clock.now += 601
    assert await cached(cache, "repos", 600, fetch) == ["new"]
    assert fetch.await_count == 2


@pytest.mark.asyncio
async def test_cached_zero_ttl_bypasses_cache():
    cache = TTLCache()
    fetch = AsyncMock(return_value="fresh")

    await cached(cache, "key", 0, fetch)
    await cached(cache, "key", 0, fetch)

    assert fetch.await_count == 2
    assert await cache.size() == 0


@pytest.mark.asyncio
async def test_cached_does_not_store_failures():
    cache = TTLCache()
    fetch = AsyncMock(side_effect=[RuntimeError("boom"), "value"])

    with pytest.raises(RuntimeError):
        await cached(cache, "key", 60, fetch)

    assert await cached(cache, "key", 60, fetch) == "value"
