"""Stock alert and alert rule endpoints."""

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import QueryParams

from stockview.api.common import get_query_params, render_listing, require_data
from stockview.db.base import get_db
from stockview.listing.views import STOCK_ALERTS_VIEW
from stockview.models.alert import AlertRule, AlertStatus, StockAlert
from stockview.models.stock import Stock
from stockview.schemas.alert import (
    AlertRuleCreate,
    AlertRuleResponse,
    AlertRuleTestResponse,
    AlertRuleUpdate,
    StockAlertCreate,
    StockAlertRow,
    StockAlertUpdate,
)
from stockview.schemas.listing import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    ListingResponse,
    MutationResponse,
)
from stockview.services.alerts import evaluate_rule
from stockview.services.collections import (
    ALERT_RULES,
    STOCK_ALERTS,
    STOCK_LEVELS,
    CollectionCache,
    get_cache,
)
from stockview.services.mutations import run_mutation
from stockview.services.records import load_stock, load_stock_alerts

router = APIRouter(prefix="/stock", tags=["alerts"])


async def _get_alert_or_404(db: AsyncSession, alert_id: UUID) -> StockAlert:
    result = await db.execute(select(StockAlert).where(StockAlert.id == alert_id))
    alert = result.scalar_one_or_none()
    if not alert:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Stock alert not found",
        )
    return alert


async def _get_rule_or_404(db: AsyncSession, rule_id: UUID) -> AlertRule:
    result = await db.execute(select(AlertRule).where(AlertRule.id == rule_id))
    rule = result.scalar_one_or_none()
    if not rule:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Alert rule not found",
        )
    return rule


# ── Alerts ─────────────────────────────────────────

@router.get("/alerts", response_model=ListingResponse[StockAlertRow])
async def list_stock_alerts(
    response: Response,
    params: QueryParams = Depends(get_query_params),
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    """List alerts. Query: search, status, severity, location, sort (date|name|quantity), page, size."""
    state = await cache.fetch(STOCK_ALERTS, lambda: load_stock_alerts(db))
    return render_listing(require_data(state), STOCK_ALERTS_VIEW, params, response)


@router.post("/alerts", response_model=MutationResponse[StockAlertRow], status_code=status.HTTP_201_CREATED)
async def create_stock_alert(
    body: StockAlertCreate,
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    """Raise an alert by hand for a stock record."""

    async def action():
        result = await db.execute(select(Stock).where(Stock.id == body.stock_id))
        stock = result.scalar_one_or_none()
        if not stock:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Stock record not found",
            )
        alert = StockAlert(
            stock=stock,
            stock_id=stock.id,
            alert_type=body.alert_type.value,
            severity=body.severity.value,
            status=AlertStatus.ACTIVE.value,
            notes=body.notes,
        )
        db.add(alert)
        await db.commit()
        await db.refresh(alert)
        return StockAlertRow.from_model(alert)

    result = await run_mutation(
        cache,
        action,
        invalidates=(STOCK_ALERTS,),
        success_message="Stock alert created successfully",
        error_message="Failed to create stock alert",
        db=db,
    )
    result.raise_for_error()
    return MutationResponse(message=result.notification.message, item=result.data)


@router.patch("/alerts/{alert_id}", response_model=MutationResponse[StockAlertRow])
async def update_stock_alert(
    alert_id: UUID,
    body: StockAlertUpdate,
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    """Resolve, dismiss or re-open an alert."""

    async def action():
        alert = await _get_alert_or_404(db, alert_id)
        alert.status = body.status.value
        if body.status == AlertStatus.ACTIVE:
            alert.resolved_at = None
        else:
            alert.resolved_at = datetime.now(timezone.utc)
        if body.notes is not None:
            alert.notes = body.notes
        await db.commit()
        await db.refresh(alert)
        return StockAlertRow.from_model(alert)

    result = await run_mutation(
        cache,
        action,
        invalidates=(STOCK_ALERTS,),
        success_message="Stock alert updated successfully",
        error_message="Failed to update stock alert",
        db=db,
    )
    result.raise_for_error()
    return MutationResponse(message=result.notification.message, item=result.data)


@router.delete("/alerts/{alert_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_stock_alert(
    alert_id: UUID,
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    async def action():
        alert = await _get_alert_or_404(db, alert_id)
        await db.delete(alert)
        await db.commit()

    result = await run_mutation(
        cache,
        action,
        invalidates=(STOCK_ALERTS,),
        success_message="Stock alert deleted successfully",
        error_message="Failed to delete stock alert",
        db=db,
    )
    result.raise_for_error()


@router.post("/alerts/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_stock_alerts(
    body: BulkDeleteRequest,
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    async def action():
        result = await db.execute(delete(StockAlert).where(StockAlert.id.in_(body.ids)))
        await db.commit()
        return result.rowcount

    result = await run_mutation(
        cache,
        action,
        invalidates=(STOCK_ALERTS,),
        success_message="Stock alerts deleted successfully",
        error_message="Failed to delete stock alerts",
        db=db,
    )
    result.raise_for_error()
    return BulkDeleteResponse(message=result.notification.message, deleted=result.data)


# ── Alert rules ────────────────────────────────────

async def _load_rules(db: AsyncSession) -> list[AlertRuleResponse]:
    result = await db.execute(select(AlertRule).order_by(AlertRule.name, AlertRule.id))
    return [AlertRuleResponse.from_model(rule) for rule in result.scalars().all()]


@router.get("/alert-rules", response_model=list[AlertRuleResponse])
async def list_alert_rules(
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    state = await cache.fetch(ALERT_RULES, lambda: _load_rules(db))
    return require_data(state)


@router.post("/alert-rules", response_model=MutationResponse[AlertRuleResponse], status_code=status.HTTP_201_CREATED)
async def create_alert_rule(
    body: AlertRuleCreate,
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    async def action():
        rule = AlertRule(
            name=body.name,
            description=body.description,
            condition_type=body.condition.type,
            operator=body.condition.operator,
            value=body.condition.value,
            value2=body.condition.value2,
            product_scope=body.products.type,
            product_ids=[str(pid) for pid in body.products.ids],
            categories=body.products.categories,
            notification_channels=list(body.notification_channels),
            is_active=True,
        )
        db.add(rule)
        await db.commit()
        await db.refresh(rule)
        return AlertRuleResponse.from_model(rule)

    result = await run_mutation(
        cache,
        action,
        invalidates=(ALERT_RULES,),
        success_message="Alert rule created successfully",
        error_message="Failed to create alert rule",
        db=db,
    )
    result.raise_for_error()
    return MutationResponse(message=result.notification.message, item=result.data)


@router.patch("/alert-rules/{rule_id}", response_model=MutationResponse[AlertRuleResponse])
async def update_alert_rule(
    rule_id: UUID,
    body: AlertRuleUpdate,
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    """Rename, describe, or switch a rule on and off."""

    async def action():
        rule = await _get_rule_or_404(db, rule_id)
        for field, value in body.model_dump(exclude_unset=True).items():
            setattr(rule, field, value)
        await db.commit()
        await db.refresh(rule)
        return AlertRuleResponse.from_model(rule)

    result = await run_mutation(
        cache,
        action,
        invalidates=(ALERT_RULES,),
        success_message="Alert rule updated successfully",
        error_message="Failed to update alert rule",
        db=db,
    )
    result.raise_for_error()
    return MutationResponse(message=result.notification.message, item=result.data)


@router.post("/alert-rules/{rule_id}/test", response_model=AlertRuleTestResponse)
async def preview_alert_rule(
    rule_id: UUID,
    cache: CollectionCache = Depends(get_cache),
    db: AsyncSession = Depends(get_db),
):
    """Show which stock records the rule would alert on right now. Nothing is sent."""
    rule = AlertRuleResponse.from_model(await _get_rule_or_404(db, rule_id))
    state = await cache.fetch(STOCK_LEVELS, lambda: load_stock(db))
    matches = evaluate_rule(rule.condition, rule.products, require_data(state))
    return AlertRuleTestResponse(rule_id=rule.id, matches=matches, count=len(matches))
