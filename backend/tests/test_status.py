"""Unit tests for derived stock statuses and level thresholds."""

from decimal import Decimal
import uuid

import pytest

from stockview.core.config import Settings
from stockview.listing.status import (
    STOCK_LEVELS,
    classify_stock_level,
    classify_stock_status,
    count_statuses,
    stock_level_thresholds,
)
from stockview.schemas.stock import StockLevelRow, StockRecord


# ── Stock status ───────────────────────────────────

@pytest.mark.parametrize(
    "quantity, reorder_point, expected",
    [
        (0, 10, "out-of-stock"),
        (-3, 10, "out-of-stock"),
        (1, 10, "low-stock"),
        (10, 10, "low-stock"),  # exactly at reorder point
        (11, 10, "in-stock"),
        (0, 0, "out-of-stock"),
        (1, 0, "in-stock"),
    ],
)
def test_classify_stock_status_boundaries(quantity, reorder_point, expected):
    assert classify_stock_status(quantity, reorder_point) == expected


# ── Stock level ────────────────────────────────────

@pytest.mark.parametrize(
    "quantity, expected",
    [
        (9, "under-min"),
        (10, "optimal"),
        (20, "optimal"),  # exactly reorder point x 2
        (21, "over-max"),
    ],
)
def test_classify_stock_level_boundaries(quantity, expected):
    assert classify_stock_level(quantity, 10) == expected


def test_classify_stock_level_uses_multiplier():
    """A larger multiplier moves the over-max boundary up."""
    assert classify_stock_level(25, 10, over_max_multiplier=2) == "over-max"
    assert classify_stock_level(25, 10, over_max_multiplier=3) == "optimal"


def test_stock_level_thresholds():
    thresholds = stock_level_thresholds(20)
    assert thresholds.min_level == 16
    assert thresholds.max_level == 40
    assert thresholds.safety_stock == 10
    assert thresholds.preferred_level == 30


def test_count_statuses_includes_zero_counts_and_total():
    counts = count_statuses([0, 5, 50, 60], lambda q: classify_stock_status(q, 10))
    assert counts == {"in-stock": 2, "low-stock": 1, "out-of-stock": 1, "total": 4}

    levels = count_statuses([], lambda q: classify_stock_level(q, 10), STOCK_LEVELS)
    assert levels == {"under-min": 0, "optimal": 0, "over-max": 0, "total": 0}


# ── Row building ───────────────────────────────────

def test_stock_level_row_is_derived_from_quantity():
    """Statuses and value are recomputed from the record, never read from storage."""
    record = StockRecord(
        id=uuid.uuid4(),
        product_id=uuid.uuid4(),
        product_name="Widget",
        sku="W-1",
        category="Parts",
        location_id=uuid.uuid4(),
        location_name="Main",
        quantity=4,
        reorder_point=10,
        unit_cost=Decimal("2.50"),
    )
    config = Settings(OVER_MAX_MULTIPLIER=3.0)

    row = StockLevelRow.build(record, config)

    assert row.status == "low-stock"
    assert row.level == "under-min"
    assert row.max_level == 30
    assert row.min_level == 8
    assert row.total_value == Decimal("10.00")
