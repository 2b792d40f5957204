"""Warehousing endpoints: warehouses, their locations, transfers and inventory."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import QueryParams

from stockview.api.common import get_query_params, render_listing, require_data
from stockview.db.base import get_db
from stockview.listing.views import (
    WAREHOUSE_INVENTORY_VIEW,
    WAREHOUSE_LOCATIONS_VIEW,
    WAREHOUSE_TRANSFERS_VIEW,
    WAREHOUSES_VIEW,
)
from stockview.models.transfer import WarehouseTransfer, WarehouseTransferStatus
from stockview.models.warehouse import Warehouse, WarehouseInventoryItem
from stockview.schemas.listing import ListingResponse
from stockview.schemas.transfer import WarehouseTransferRow
from stockview.schemas.warehouse import LocationRow, WarehouseInventoryRow, WarehouseRow
from stockview.services.collections import (
    WAREHOUSE_INVENTORY,
    WAREHOUSE_TRANSFERS,
    WAREHOUSES,
    CollectionCache,
    get_cache,
    warehouse_inventory_key,
    warehouse_locations_key,
)
from stockview.services.mutations import run_mutation
from stockview.services.records import (
    load_warehouse_inventory,
    load_warehouse_locations,
    load_warehouse_transfers,
    load_warehouses,
)

router = APIRouter(prefix="/warehousing", tags=["warehousing"])


async def _require_warehouse(db: AsyncSession, warehouse_id: UUID) -> None:
    result = await db.execute(select(Warehouse.id).where(Warehouse.id == warehouse_id))
    if result.scalar_one_or_none() is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Warehouse not found",
        )


# ── Warehouses ─────────────────────────────────────

@router.get("", response_model=ListingResponse[WarehouseRow])
async def list_warehouses(
    response: Response,
    params: QueryParams = Depends(get_query_params),
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    """
    List warehouses.

    Query: search, status (active|inactive|maintenance), location (city),
    sort (name|capacity|utilization), page, size.
    """
    state = await cache.fetch(WAREHOUSES, lambda: load_warehouses(db))
    return render_listing(require_data(state), WAREHOUSES_VIEW, params, response)


@router.get("/{warehouse_id}/locations", response_model=ListingResponse[LocationRow])
async def list_warehouse_locations(
    warehouse_id: UUID,
    response: Response,
    params: QueryParams = Depends(get_query_params),
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    """
    List the storage locations of one warehouse.

    Query: search, type (zone|aisle|section|shelf|bin),
    status (active|inactive|maintenance|reserved), sort (name|capacity|utilization), page, size.
    """
    await _require_warehouse(db, warehouse_id)
    state = await cache.fetch(
        warehouse_locations_key(warehouse_id),
        lambda: load_warehouse_locations(db, warehouse_id),
    )
    return render_listing(require_data(state), WAREHOUSE_LOCATIONS_VIEW, params, response)


# ── Transfers ──────────────────────────────────────

@router.get("/transfers", response_model=ListingResponse[WarehouseTransferRow])
async def list_warehouse_transfers(
    response: Response,
    params: QueryParams = Depends(get_query_params),
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    """
    List warehouse transfers.

    Query: search, status, source, destination (warehouse ids),
    date (today|week|month|quarter), sort (id|date|arrival|items|status), page, size.
    Transfers without an estimated arrival sort last.
    """
    state = await cache.fetch(WAREHOUSE_TRANSFERS, lambda: load_warehouse_transfers(db))
    return render_listing(require_data(state), WAREHOUSE_TRANSFERS_VIEW, params, response)


@router.delete("/transfers/{transfer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_warehouse_transfer(
    transfer_id: UUID,
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    """Delete a transfer that has not left draft."""

    async def action():
        result = await db.execute(select(WarehouseTransfer).where(WarehouseTransfer.id == transfer_id))
        transfer = result.scalar_one_or_none()
        if not transfer:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Warehouse transfer not found",
            )
        if transfer.status != WarehouseTransferStatus.DRAFT.value:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Only draft transfers can be deleted",
            )
        await db.delete(transfer)
        await db.commit()

    result = await run_mutation(
        cache,
        action,
        invalidates=(WAREHOUSE_TRANSFERS,),
        success_message="Transfer deleted successfully",
        error_message="Failed to delete transfer",
        db=db,
    )
    result.raise_for_error()


# ── Inventory ──────────────────────────────────────

@router.get("/{warehouse_id}/inventory", response_model=ListingResponse[WarehouseInventoryRow])
async def list_warehouse_inventory(
    warehouse_id: UUID,
    response: Response,
    params: QueryParams = Depends(get_query_params),
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    """
    List one warehouse's inventory.

    Query: search, category, location (location id), status
    (in-stock|low-stock|out-of-stock), sort (name|quantity|category), page, size.
    """
    await _require_warehouse(db, warehouse_id)
    state = await cache.fetch(
        warehouse_inventory_key(warehouse_id),
        lambda: load_warehouse_inventory(db, warehouse_id),
    )
    return render_listing(require_data(state), WAREHOUSE_INVENTORY_VIEW, params, response)


@router.delete("/inventory/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_warehouse_inventory_item(
    item_id: UUID,
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    async def action():
        result = await db.execute(select(WarehouseInventoryItem).where(WarehouseInventoryItem.id == item_id))
        item = result.scalar_one_or_none()
        if not item:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Inventory item not found",
            )
        await db.delete(item)
        await db.commit()

    result = await run_mutation(
        cache,
        action,
        invalidates=(WAREHOUSE_INVENTORY,),
        success_message="Inventory item deleted successfully",
        error_message="Failed to delete inventory item",
        db=db,
    )
    result.raise_for_error()
