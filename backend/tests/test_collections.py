"""Unit tests for the collection cache."""

import asyncio

import pytest

from stockview.services.collections import (
    STOCK,
    STOCK_ALERTS,
    STOCK_LEVELS,
    WAREHOUSE_TRANSFERS,
    CollectionCache,
    warehouse_inventory_key,
)


class CountingLoader:
    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0
        self.release = asyncio.Event()
        self.release.set()

    async def __call__(self):
        self.calls += 1
        await self.release.wait()
        result = self.results[min(self.calls, len(self.results)) - 1]
        if isinstance(result, Exception):
            raise result
        return result


RELOADED = ["reloaded"]


async def served(cache, key):
    """What a fetch of ``key`` returns now: the cached records, or RELOADED if it had to load."""
    return (await cache.fetch(key, CountingLoader(RELOADED))).data


@pytest.mark.asyncio
async def test_fetch_caches_data():
    cache = CollectionCache()
    loader = CountingLoader([1, 2, 3])

    first = await cache.fetch(STOCK_LEVELS, loader)
    second = await cache.fetch(STOCK_LEVELS, loader)

    assert first.data == [1, 2, 3]
    assert second.data == [1, 2, 3]
    assert loader.calls == 1
    assert await served(cache, STOCK_LEVELS) == [1, 2, 3]


@pytest.mark.asyncio
async def test_concurrent_fetches_share_one_load():
    cache = CollectionCache()
    loader = CountingLoader(["a"])
    loader.release.clear()

    pending = asyncio.gather(cache.fetch(STOCK_LEVELS, loader), cache.fetch(STOCK_LEVELS, loader))
    await asyncio.sleep(0)
    loader.release.set()
    first, second = await pending

    assert loader.calls == 1
    assert first.data == second.data == ["a"]


@pytest.mark.asyncio
async def test_invalidate_drops_keys_by_prefix():
    cache = CollectionCache()
    wid = "wh-1"
    await cache.fetch(STOCK_LEVELS, CountingLoader([1]))
    await cache.fetch(STOCK_ALERTS, CountingLoader([2]))
    await cache.fetch(WAREHOUSE_TRANSFERS, CountingLoader([3]))
    await cache.fetch(warehouse_inventory_key(wid), CountingLoader([4]))

    cache.invalidate(STOCK)

    assert await served(cache, STOCK_LEVELS) == RELOADED
    assert await served(cache, STOCK_ALERTS) == RELOADED
    assert await served(cache, WAREHOUSE_TRANSFERS) == [3]
    assert await served(cache, warehouse_inventory_key(wid)) == [4]


@pytest.mark.asyncio
async def test_load_in_flight_during_invalidation_is_not_stored():
    """A response that predates a mutation is handed back but never cached."""
    cache = CollectionCache()
    loader = CountingLoader(["old"], ["new"])
    loader.release.clear()

    pending = asyncio.ensure_future(cache.fetch(STOCK_LEVELS, loader))
    await asyncio.sleep(0)
    cache.invalidate(STOCK_LEVELS)
    loader.release.set()
    stale = await pending

    assert stale.data == ["old"]

    fresh = await cache.fetch(STOCK_LEVELS, loader)
    assert fresh.data == ["new"]
    assert loader.calls == 2
    assert await served(cache, STOCK_LEVELS) == ["new"]


@pytest.mark.asyncio
async def test_failed_load_returns_error_and_is_not_cached():
    cache = CollectionCache()
    loader = CountingLoader(RuntimeError("database down"), ["recovered"])

    failed = await cache.fetch(STOCK_ALERTS, loader)
    assert isinstance(failed.error, RuntimeError)
    assert failed.data == []

    recovered = await cache.fetch(STOCK_ALERTS, loader)
    assert recovered.error is None
    assert recovered.data == ["recovered"]


@pytest.mark.asyncio
async def test_clear():
    cache = CollectionCache()
    await cache.fetch(STOCK_LEVELS, CountingLoader([1]))
    cache.clear()
    assert await served(cache, STOCK_LEVELS) == RELOADED
