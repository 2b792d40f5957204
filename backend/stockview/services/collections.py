"""Keyed cache of record collections.

Each list view fetches its whole collection through ``CollectionCache.fetch``
under a query key (a tuple such as ``("stock", "levels")``). Mutations never
patch cached data in place: they invalidate a key prefix and the next fetch
reloads from the database.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, TypeVar

from fastapi import Request

logger = logging.getLogger(__name__)

T = TypeVar("T")

QueryKey = tuple[str, ...]

# Query keys used by the API
STOCK = ("stock",)
STOCK_LEVELS = ("stock", "levels")
STOCK_ALERTS = ("stock", "alerts")
ALERT_RULES = ("stock", "alert-rules")
STOCK_TRANSFERS = ("stock", "transfers")
WAREHOUSE_TRANSFERS = ("warehousing", "transfers")
WAREHOUSE_INVENTORY = ("warehousing", "inventory")
WAREHOUSES = ("warehousing", "warehouses")
WAREHOUSE_LOCATIONS = ("warehousing", "locations")


def warehouse_inventory_key(warehouse_id) -> QueryKey:
    return (*WAREHOUSE_INVENTORY, str(warehouse_id))


def warehouse_locations_key(warehouse_id) -> QueryKey:
    return (*WAREHOUSE_LOCATIONS, str(warehouse_id))


@dataclass
class CollectionState(Generic[T]):
    data: list[T] = field(default_factory=list)
    is_loading: bool = False
    error: Exception | None = None


class CollectionCache:
    """Per-application collection cache with load de-duplication.

    Concurrent fetches of one key share a single load. If the key is
    invalidated while that load is in flight, its result is returned to the
    waiting callers but not stored, since it may predate the mutation.
    """

    def __init__(self):
        self._data: dict[QueryKey, list] = {}
        self._inflight: dict[QueryKey, asyncio.Task] = {}
        self._generation: dict[QueryKey, int] = {}

    async def fetch(self, key: QueryKey, loader: Callable[[], Awaitable[list[T]]]) -> CollectionState[T]:
        if key in self._data:
            return CollectionState(data=self._data[key])

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load(key, loader, self._generation.get(key, 0)))
            self._inflight[key] = task
        try:
            data = await asyncio.shield(task)
        except Exception as e:
            logger.error(f"Failed to load collection {key}: {e}")
            return CollectionState(error=e)
        return CollectionState(data=data)

    async def _load(self, key: QueryKey, loader: Callable[[], Awaitable[list]], generation: int) -> list:
        try:
            data = list(await loader())
        finally:
            if self._inflight.get(key) is asyncio.current_task():
                del self._inflight[key]
        if self._generation.get(key, 0) == generation:
            self._data[key] = data
            logger.debug(f"Loaded collection {key}: {len(data)} records")
        else:
            logger.debug(f"Discarded stale load of {key}")
        return data

    def invalidate(self, *prefixes: QueryKey) -> None:
        """Drop every cached key starting with one of ``prefixes``."""
        known = set(self._data) | set(self._inflight) | set(self._generation)
        for key in known:
            if any(key[: len(prefix)] == prefix for prefix in prefixes):
                self._data.pop(key, None)
                # A newer generation makes in-flight loads for the key stale
                self._generation[key] = self._generation.get(key, 0) + 1
                self._inflight.pop(key, None)

    def clear(self) -> None:
        self._data.clear()
        self._inflight.clear()
        self._generation.clear()


def get_cache(request: Request) -> CollectionCache:
    """FastAPI dependency returning the application's cache."""
    return request.app.state.cache
