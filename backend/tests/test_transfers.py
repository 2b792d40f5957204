"""Unit tests for stock transfers and warehousing endpoints."""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
import uuid

import pytest
from fastapi import HTTPException
from starlette.datastructures import QueryParams
from starlette.responses import Response

from stockview.models.transfer import StockTransfer, WarehouseTransfer
from stockview.models.warehouse import Location, Warehouse
from stockview.schemas.transfer import StockTransferUpdate
from stockview.services.collections import (
    STOCK_TRANSFERS,
    WAREHOUSE_TRANSFERS,
    CollectionCache,
    warehouse_inventory_key,
)


def mock_db_returning(obj):
    mock_db = AsyncMock()
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = obj
    mock_db.execute.return_value = mock_result
    return mock_db


def make_transfer(status):
    source = Location(id=uuid.uuid4(), name="Main", code="MAIN")
    destination = Location(id=uuid.uuid4(), name="Backroom", code="BACK")
    return StockTransfer(
        id=uuid.uuid4(),
        transfer_number="TR-0001",
        status=status,
        requested_by="Sam",
        requested_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
        source_location=source,
        source_location_id=source.id,
        destination_location=destination,
        destination_location_id=destination.id,
        items=[],
    )


RELOADED = ["reloaded"]


async def served(cache, key):
    """What a fetch of ``key`` returns now: the cached records, or RELOADED if it had to load."""
    return (await cache.fetch(key, AsyncMock(return_value=RELOADED))).data


async def cache_with(key, rows):
    cache = CollectionCache()

    async def loader():
        return rows

    await cache.fetch(key, loader)
    return cache


# ── Stock transfers ────────────────────────────────

@pytest.mark.asyncio
async def test_start_draft_transfer():
    from stockview.api.transfers import update_stock_transfer

    transfer = make_transfer("draft")
    cache = await cache_with(STOCK_TRANSFERS, ["cached"])

    response = await update_stock_transfer(
        transfer.id, StockTransferUpdate(status="in-progress"), cache=cache, db=mock_db_returning(transfer)
    )

    assert transfer.status == "in-progress"
    assert transfer.completed_at is None
    assert response.item.status == "in-progress"
    assert response.item.item_count == 0
    assert await served(cache, STOCK_TRANSFERS) == RELOADED


@pytest.mark.asyncio
async def test_complete_transfer_sets_completed_at():
    from stockview.api.transfers import update_stock_transfer

    transfer = make_transfer("in-progress")

    await update_stock_transfer(
        transfer.id, StockTransferUpdate(status="completed"), cache=CollectionCache(), db=mock_db_returning(transfer)
    )

    assert transfer.status == "completed"
    assert transfer.completed_at is not None


@pytest.mark.asyncio
async def test_finished_transfer_cannot_change():
    """Completed transfers are final."""
    from stockview.api.transfers import update_stock_transfer

    transfer = make_transfer("completed")
    mock_db = mock_db_returning(transfer)

    with pytest.raises(HTTPException) as exc_info:
        await update_stock_transfer(
            transfer.id, StockTransferUpdate(status="draft"), cache=CollectionCache(), db=mock_db
        )

    assert exc_info.value.status_code == 409
    assert transfer.status == "completed"
    mock_db.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_missing_transfer():
    from stockview.api.transfers import update_stock_transfer

    with pytest.raises(HTTPException) as exc_info:
        await update_stock_transfer(
            uuid.uuid4(), StockTransferUpdate(status="cancelled"), cache=CollectionCache(), db=mock_db_returning(None)
        )

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_list_stock_transfers_by_source():
    from stockview.api.transfers import list_stock_transfers

    main, backroom = str(uuid.uuid4()), str(uuid.uuid4())
    rows = [
        SimpleNamespace(transfer_number="TR-1", source_location_id=main, destination_location_id=backroom,
                        requested_at=datetime(2024, 5, 1), status="draft"),
        SimpleNamespace(transfer_number="TR-2", source_location_id=backroom, destination_location_id=main,
                        requested_at=datetime(2024, 5, 3), status="draft"),
        SimpleNamespace(transfer_number="TR-3", source_location_id=main, destination_location_id=backroom,
                        requested_at=datetime(2024, 5, 2), status="completed"),
    ]
    cache = await cache_with(STOCK_TRANSFERS, rows)

    result = await list_stock_transfers(
        response=Response(), params=QueryParams(f"source={main}"), cache=cache, db=AsyncMock()
    )

    assert [t.transfer_number for t in result.items] == ["TR-3", "TR-1"]


# ── Warehouse transfers ────────────────────────────

def make_warehouse_transfer(status):
    source = Warehouse(id=uuid.uuid4(), name="North", code="N")
    destination = Warehouse(id=uuid.uuid4(), name="South", code="S")
    return WarehouseTransfer(
        id=uuid.uuid4(),
        status=status,
        initiated_by="Kim",
        initiated_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
        source_warehouse=source,
        destination_warehouse=destination,
        items=[],
    )


@pytest.mark.asyncio
async def test_delete_draft_warehouse_transfer():
    from stockview.api.warehousing import delete_warehouse_transfer

    transfer = make_warehouse_transfer("draft")
    mock_db = mock_db_returning(transfer)
    cache = await cache_with(WAREHOUSE_TRANSFERS, ["cached"])

    await delete_warehouse_transfer(transfer.id, cache=cache, db=mock_db)

    mock_db.delete.assert_awaited_once_with(transfer)
    assert await served(cache, WAREHOUSE_TRANSFERS) == RELOADED


@pytest.mark.asyncio
async def test_in_transit_warehouse_transfer_cannot_be_deleted():
    from stockview.api.warehousing import delete_warehouse_transfer

    transfer = make_warehouse_transfer("in-transit")
    mock_db = mock_db_returning(transfer)

    with pytest.raises(HTTPException) as exc_info:
        await delete_warehouse_transfer(transfer.id, cache=CollectionCache(), db=mock_db)

    assert exc_info.value.status_code == 409
    mock_db.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_list_warehouse_transfers_arrival_sort():
    from stockview.api.warehousing import list_warehouse_transfers

    rows = [
        SimpleNamespace(id="wt-1", source_warehouse_id="n", destination_warehouse_id="s",
                        estimated_arrival=None, status="pending", initiated_at=datetime(2024, 5, 1)),
        SimpleNamespace(id="wt-2", source_warehouse_id="n", destination_warehouse_id="s",
                        estimated_arrival=datetime(2024, 6, 9), status="pending", initiated_at=datetime(2024, 5, 2)),
        SimpleNamespace(id="wt-3", source_warehouse_id="n", destination_warehouse_id="s",
                        estimated_arrival=datetime(2024, 6, 1), status="in-transit", initiated_at=datetime(2024, 5, 3)),
    ]
    cache = await cache_with(WAREHOUSE_TRANSFERS, rows)

    result = await list_warehouse_transfers(
        response=Response(), params=QueryParams("sort=arrival-asc"), cache=cache, db=AsyncMock()
    )

    assert [t.id for t in result.items] == ["wt-3", "wt-2", "wt-1"]


# ── Warehouse inventory ────────────────────────────

@pytest.mark.asyncio
async def test_list_inventory_of_unknown_warehouse():
    from stockview.api.warehousing import list_warehouse_inventory

    with pytest.raises(HTTPException) as exc_info:
        await list_warehouse_inventory(
            uuid.uuid4(), response=Response(), params=QueryParams(""), cache=CollectionCache(), db=mock_db_returning(None)
        )

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_list_inventory_status_filter():
    from stockview.api.warehousing import list_warehouse_inventory

    warehouse_id = uuid.uuid4()
    rows = [
        SimpleNamespace(product_name="Rope", sku="R", category="Rigging", location_id=None, status="low-stock", quantity=2),
        SimpleNamespace(product_name="Hook", sku="H", category="Rigging", location_id=None, status="in-stock", quantity=40),
        SimpleNamespace(product_name="Chain", sku="C", category="Rigging", location_id=None, status="low-stock", quantity=1),
    ]
    cache = await cache_with(warehouse_inventory_key(warehouse_id), rows)

    result = await list_warehouse_inventory(
        warehouse_id,
        response=Response(),
        params=QueryParams("status=low-stock"),
        cache=cache,
        db=mock_db_returning(warehouse_id),
    )

    assert [r.product_name for r in result.items] == ["Chain", "Rope"]


@pytest.mark.asyncio
async def test_delete_inventory_item_invalidates_every_warehouse():
    from stockview.api.warehousing import delete_warehouse_inventory_item

    item = MagicMock()
    first, second = uuid.uuid4(), uuid.uuid4()
    cache = await cache_with(warehouse_inventory_key(first), ["a"])
    await cache.fetch(warehouse_inventory_key(second), AsyncMock(return_value=["b"]))
    mock_db = mock_db_returning(item)

    await delete_warehouse_inventory_item(uuid.uuid4(), cache=cache, db=mock_db)

    mock_db.delete.assert_awaited_once_with(item)
    assert await served(cache, warehouse_inventory_key(first)) == RELOADED
    assert await served(cache, warehouse_inventory_key(second)) == RELOADED
