"""Alert upkeep after quantity changes, and alert rule evaluation."""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable

from stockview.listing.sorting import as_utc
from stockview.listing.status import IN_STOCK, OUT_OF_STOCK, classify_stock_status
from stockview.models.alert import AlertSeverity, AlertStatus, StockAlert
from stockview.schemas.alert import (
    AlertRuleCondition,
    AlertRuleMatch,
    AlertRuleProducts,
)
from stockview.schemas.stock import StockRecord

logger = logging.getLogger(__name__)


def sync_stock_alerts(stock, now: datetime | None = None) -> StockAlert | None:
    """Open or resolve alerts so they agree with the stock's current status.

    Low and out-of-stock each keep at most one active alert of their own
    type; active alerts of any other type are resolved. Back in stock, every
    active alert is resolved. Returns the alert opened, if any.
    """
    now = now or datetime.now(timezone.utc)
    current = classify_stock_status(stock.quantity, stock.reorder_point)
    active = [a for a in stock.alerts if a.status == AlertStatus.ACTIVE.value]

    for alert in active:
        if current == IN_STOCK or alert.alert_type != current:
            alert.status = AlertStatus.RESOLVED.value
            alert.resolved_at = now
            logger.info(f"Resolved {alert.alert_type} alert for stock {stock.id}")

    if current == IN_STOCK or any(a.alert_type == current for a in active):
        return None

    alert = StockAlert(
        stock_id=stock.id,
        alert_type=current,
        severity=(AlertSeverity.HIGH if current == OUT_OF_STOCK else AlertSeverity.MEDIUM).value,
        status=AlertStatus.ACTIVE.value,
    )
    stock.alerts.append(alert)
    logger.info(f"Opened {current} alert for stock {stock.id}")
    return alert


# ── Rules ──────────────────────────────────────────

def measure(condition: AlertRuleCondition, record: StockRecord, now: datetime) -> Decimal | None:
    if condition.type == "stock_level":
        return Decimal(record.quantity)
    if condition.type == "stock_value":
        return record.unit_cost * record.quantity
    if condition.type == "stock_age":
        if record.last_restocked is None:
            return None
        return Decimal((as_utc(now) - as_utc(record.last_restocked)).days)
    raise ValueError(f"Unknown condition type: {condition.type}")


def compare(condition: AlertRuleCondition, measured: Decimal) -> bool:
    if condition.operator == "less_than":
        return measured < condition.value
    if condition.operator == "greater_than":
        return measured > condition.value
    if condition.operator == "equals":
        return measured == condition.value
    if condition.operator == "between":
        low, high = sorted((condition.value, condition.value2))
        return low <= measured <= high
    raise ValueError(f"Unknown operator: {condition.operator}")


def in_scope(products: AlertRuleProducts, record: StockRecord) -> bool:
    if products.type == "category":
        return record.category in products.categories
    if products.type == "specific":
        return record.product_id in products.ids
    return True


def evaluate_rule(
    condition: AlertRuleCondition,
    products: AlertRuleProducts,
    records: Iterable[StockRecord],
    now: datetime | None = None,
) -> list[AlertRuleMatch]:
    """Stock records the rule would alert on right now."""
    now = now or datetime.now(timezone.utc)
    matches = []
    for record in records:
        if not in_scope(products, record):
            continue
        measured = measure(condition, record, now)
        if measured is not None and compare(condition, measured):
            matches.append(
                AlertRuleMatch(
                    stock_id=record.id,
                    product_name=record.product_name,
                    sku=record.sku,
                    location_name=record.location_name,
                    measured_value=measured,
                )
            )
    return matches
