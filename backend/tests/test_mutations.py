"""Unit tests for the mutation runner."""

from unittest.mock import AsyncMock

import pytest
from fastapi import HTTPException

from stockview.services.collections import STOCK, STOCK_LEVELS, STOCK_TRANSFERS, CollectionCache
from stockview.services.mutations import run_mutation


async def cached(cache, key, data):
    async def loader():
        return data

    await cache.fetch(key, loader)


RELOADED = ["reloaded"]


async def served(cache, key):
    """What a fetch of ``key`` returns now: the cached records, or RELOADED if it had to load."""
    return (await cache.fetch(key, AsyncMock(return_value=RELOADED))).data


@pytest.mark.asyncio
async def test_successful_mutation_invalidates_and_notifies():
    cache = CollectionCache()
    await cached(cache, STOCK_LEVELS, [1])
    await cached(cache, STOCK_TRANSFERS, [2])

    async def action():
        return "done"

    result = await run_mutation(
        cache,
        action,
        invalidates=(STOCK_LEVELS,),
        success_message="Stock adjusted successfully",
        error_message="Failed to adjust stock",
    )

    assert result.ok is True
    assert result.data == "done"
    assert result.notification.level == "success"
    assert result.notification.message == "Stock adjusted successfully"
    assert await served(cache, STOCK_LEVELS) == RELOADED
    assert await served(cache, STOCK_TRANSFERS) == [2]
    result.raise_for_error()


@pytest.mark.asyncio
async def test_failed_mutation_rolls_back_and_keeps_cache():
    cache = CollectionCache()
    await cached(cache, STOCK_LEVELS, [1])
    mock_db = AsyncMock()

    async def action():
        raise RuntimeError("constraint violated")

    result = await run_mutation(
        cache,
        action,
        invalidates=(STOCK,),
        success_message="Stock item deleted successfully",
        error_message="Failed to delete stock item",
        db=mock_db,
    )

    assert result.ok is False
    assert result.notification.level == "error"
    assert result.notification.message == "Failed to delete stock item"
    assert isinstance(result.error, RuntimeError)
    mock_db.rollback.assert_awaited_once()
    assert await served(cache, STOCK_LEVELS) == [1]

    with pytest.raises(HTTPException) as exc_info:
        result.raise_for_error()
    assert exc_info.value.status_code == 500
    assert exc_info.value.detail == "Failed to delete stock item"


@pytest.mark.asyncio
async def test_http_errors_from_the_action_are_kept():
    cache = CollectionCache()

    async def action():
        raise HTTPException(status_code=404, detail="Stock record not found")

    result = await run_mutation(
        cache,
        action,
        invalidates=(STOCK,),
        success_message="ok",
        error_message="Failed",
    )

    with pytest.raises(HTTPException) as exc_info:
        result.raise_for_error()
    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Stock record not found"
