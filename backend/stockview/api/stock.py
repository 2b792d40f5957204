"""Stock level endpoints: list, statistics, adjustments and deletes."""

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import QueryParams

from stockview.api.common import get_query_params, render_listing, require_data
from stockview.core.config import settings
from stockview.db.base import get_db
from stockview.listing.status import STOCK_LEVELS, count_statuses
from stockview.listing.views import STOCK_LEVELS_VIEW
from stockview.models.stock import Stock
from stockview.schemas.listing import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    ListingResponse,
    MutationResponse,
)
from stockview.schemas.stock import (
    StockAdjustment,
    StockLevelRow,
    StockRecord,
    StockStatsResponse,
)
from stockview.services.alerts import sync_stock_alerts
from stockview.services.collections import STOCK, STOCK_LEVELS as STOCK_LEVELS_KEY, CollectionCache, get_cache
from stockview.services.mutations import run_mutation
from stockview.services.records import load_stock

router = APIRouter(prefix="/stock", tags=["stock"])


async def _stock_level_rows(cache: CollectionCache, db: AsyncSession) -> list[StockLevelRow]:
    state = await cache.fetch(STOCK_LEVELS_KEY, lambda: load_stock(db))
    # Statuses are derived here, on every read, from the cached quantities
    return [StockLevelRow.build(record, settings) for record in require_data(state)]


async def _get_stock_or_404(db: AsyncSession, stock_id: UUID) -> Stock:
    result = await db.execute(select(Stock).where(Stock.id == stock_id))
    stock = result.scalar_one_or_none()
    if not stock:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Stock record not found",
        )
    return stock


@router.get("/levels", response_model=ListingResponse[StockLevelRow])
async def list_stock_levels(
    response: Response,
    params: QueryParams = Depends(get_query_params),
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    """
    List stock levels.

    Query: search, status (in-stock|low-stock|out-of-stock), location, level
    (under-min|optimal|over-max), category, sort (name|quantity|min-stock|max-stock
    with -asc/-desc), page, size.
    """
    rows = await _stock_level_rows(cache, db)
    return render_listing(rows, STOCK_LEVELS_VIEW, params, response)


@router.get("/levels/stats", response_model=StockStatsResponse)
async def get_stock_level_stats(
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    """Counts per stock status and stock level, for the summary cards."""
    rows = await _stock_level_rows(cache, db)
    statuses = count_statuses(rows, lambda row: row.status)
    levels = count_statuses(rows, lambda row: row.level, STOCK_LEVELS)
    return StockStatsResponse(
        total=statuses["total"],
        in_stock=statuses["in-stock"],
        low_stock=statuses["low-stock"],
        out_of_stock=statuses["out-of-stock"],
        under_min=levels["under-min"],
        optimal=levels["optimal"],
        over_max=levels["over-max"],
        total_value=sum((row.total_value for row in rows), start=0),
    )


@router.post("/{stock_id}/adjust", response_model=MutationResponse[StockLevelRow])
async def adjust_stock(
    stock_id: UUID,
    adjustment: StockAdjustment,
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    """
    Adjust a stock quantity.

    Use positive quantity_delta for stock in, negative for stock out. Alerts
    for the stock are opened or resolved to match the new quantity.
    """

    async def action():
        stock = await _get_stock_or_404(db, stock_id)
        new_quantity = stock.quantity + adjustment.quantity_delta
        if new_quantity < 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Insufficient stock. Current: {stock.quantity}, requested: {abs(adjustment.quantity_delta)}",
            )
        stock.quantity = new_quantity
        if adjustment.quantity_delta > 0:
            stock.last_restocked = datetime.now(timezone.utc)
        sync_stock_alerts(stock)
        await db.commit()
        await db.refresh(stock)
        return StockLevelRow.build(StockRecord.from_model(stock), settings)

    result = await run_mutation(
        cache,
        action,
        invalidates=(STOCK,),
        success_message="Stock adjusted successfully",
        error_message="Failed to adjust stock",
        db=db,
    )
    result.raise_for_error()
    return MutationResponse(message=result.notification.message, item=result.data)


@router.delete("/{stock_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_stock(
    stock_id: UUID,
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    """Delete a stock record together with its alerts."""

    async def action():
        stock = await _get_stock_or_404(db, stock_id)
        await db.delete(stock)
        await db.commit()

    result = await run_mutation(
        cache,
        action,
        invalidates=(STOCK,),
        success_message="Stock item deleted successfully",
        error_message="Failed to delete stock item",
        db=db,
    )
    result.raise_for_error()


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_stock(
    body: BulkDeleteRequest,
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    """Delete several stock records at once; unknown ids are ignored."""

    async def action():
        result = await db.execute(delete(Stock).where(Stock.id.in_(body.ids)))
        await db.commit()
        return result.rowcount

    result = await run_mutation(
        cache,
        action,
        invalidates=(STOCK,),
        success_message="Stock items deleted successfully",
        error_message="Failed to delete stock items",
        db=db,
    )
    result.raise_for_error()
    return BulkDeleteResponse(message=result.notification.message, deleted=result.data)
