"""Stock transfer endpoints (location to location)."""

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import QueryParams

from stockview.api.common import get_query_params, render_listing, require_data
from stockview.db.base import get_db
from stockview.listing.views import STOCK_TRANSFERS_VIEW
from stockview.models.transfer import StockTransfer, StockTransferStatus
from stockview.schemas.listing import ListingResponse, MutationResponse
from stockview.schemas.transfer import StockTransferRow, StockTransferUpdate
from stockview.services.collections import STOCK_TRANSFERS, CollectionCache, get_cache
from stockview.services.mutations import run_mutation
from stockview.services.records import load_stock_transfers

router = APIRouter(prefix="/stock/transfers", tags=["transfers"])

# Completed and cancelled transfers are final
ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    StockTransferStatus.DRAFT.value: {
        StockTransferStatus.IN_PROGRESS.value,
        StockTransferStatus.CANCELLED.value,
    },
    StockTransferStatus.IN_PROGRESS.value: {
        StockTransferStatus.COMPLETED.value,
        StockTransferStatus.CANCELLED.value,
    },
    StockTransferStatus.COMPLETED.value: set(),
    StockTransferStatus.CANCELLED.value: set(),
}


async def _get_transfer_or_404(db: AsyncSession, transfer_id: UUID) -> StockTransfer:
    result = await db.execute(select(StockTransfer).where(StockTransfer.id == transfer_id))
    transfer = result.scalar_one_or_none()
    if not transfer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Stock transfer not found",
        )
    return transfer


@router.get("", response_model=ListingResponse[StockTransferRow])
async def list_stock_transfers(
    response: Response,
    params: QueryParams = Depends(get_query_params),
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    """
    List transfers.

    Query: search, status, source, destination (location ids),
    date (today|week|month|quarter), sort (date|number|source|destination), page, size.
    """
    state = await cache.fetch(STOCK_TRANSFERS, lambda: load_stock_transfers(db))
    return render_listing(require_data(state), STOCK_TRANSFERS_VIEW, params, response)


@router.patch("/{transfer_id}", response_model=MutationResponse[StockTransferRow])
async def update_stock_transfer(
    transfer_id: UUID,
    body: StockTransferUpdate,
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    """Move a transfer along: start, complete or cancel it."""

    async def action():
        transfer = await _get_transfer_or_404(db, transfer_id)
        new_status = body.status.value
        if new_status != transfer.status and new_status not in ALLOWED_TRANSITIONS.get(transfer.status, set()):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Cannot change transfer status from '{transfer.status}' to '{new_status}'",
            )
        transfer.status = new_status
        if new_status == StockTransferStatus.COMPLETED.value:
            transfer.completed_at = datetime.now(timezone.utc)
        if body.notes is not None:
            transfer.notes = body.notes
        await db.commit()
        await db.refresh(transfer)
        return StockTransferRow.from_model(transfer)

    result = await run_mutation(
        cache,
        action,
        invalidates=(STOCK_TRANSFERS,),
        success_message="Stock transfer updated successfully",
        error_message="Failed to update stock transfer",
        db=db,
    )
    result.raise_for_error()
    return MutationResponse(message=result.notification.message, item=result.data)


@router.delete("/{transfer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_stock_transfer(
    transfer_id: UUID,
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    async def action():
        transfer = await _get_transfer_or_404(db, transfer_id)
        await db.delete(transfer)
        await db.commit()

    result = await run_mutation(
        cache,
        action,
        invalidates=(STOCK_TRANSFERS,),
        success_message="Stock transfer deleted successfully",
        error_message="Failed to delete stock transfer",
        db=db,
    )
    result.raise_for_error()
