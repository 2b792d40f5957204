"""Unit tests for search and filter matching."""

from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
import uuid

from stockview.core.config import settings
from stockview.listing.filters import date_range_start, filter_records
from stockview.listing.views import STOCK_LEVELS_VIEW, STOCK_TRANSFERS_VIEW
from stockview.schemas.stock import StockLevelRow, StockRecord

MAIN = uuid.uuid4()
BACKROOM = uuid.uuid4()

# Wednesday
NOW = datetime(2024, 5, 15, 12, 30, tzinfo=timezone.utc)


def make_row(name, sku, quantity, reorder_point=10, location_id=MAIN, category="Parts"):
    record = StockRecord(
        id=uuid.uuid4(),
        product_id=uuid.uuid4(),
        product_name=name,
        sku=sku,
        category=category,
        location_id=location_id,
        location_name="Main" if location_id == MAIN else "Backroom",
        quantity=quantity,
        reorder_point=reorder_point,
        unit_cost=Decimal("1.00"),
    )
    return StockLevelRow.build(record, settings)


ROWS = [
    make_row("Blue Widget", "BW-100", 0),
    make_row("Red Widget", "RW-200", 5),
    make_row("Green Gadget", "GG-300", 50, location_id=BACKROOM, category="Tools"),
    make_row("Yellow Gadget", "YG-400", 8, location_id=BACKROOM, category="Tools"),
]


# ── Search ─────────────────────────────────────────

def test_search_is_case_insensitive_substring():
    result = filter_records(ROWS, STOCK_LEVELS_VIEW, search="  wIdGeT ")
    assert [r.product_name for r in result] == ["Blue Widget", "Red Widget"]


def test_search_matches_sku():
    result = filter_records(ROWS, STOCK_LEVELS_VIEW, search="gg-3")
    assert [r.product_name for r in result] == ["Green Gadget"]


def test_empty_search_matches_everything():
    assert filter_records(ROWS, STOCK_LEVELS_VIEW, search="") == ROWS


# ── Categorical filters ────────────────────────────

def test_low_stock_filter():
    """Only rows with 0 < quantity <= reorder point are low stock."""
    result = filter_records(ROWS, STOCK_LEVELS_VIEW, filters={"status": "low-stock"})
    assert [r.product_name for r in result] == ["Red Widget", "Yellow Gadget"]


def test_filters_combine_with_and():
    result = filter_records(
        ROWS,
        STOCK_LEVELS_VIEW,
        search="gadget",
        filters={"status": "low-stock", "location": str(BACKROOM)},
    )
    assert [r.product_name for r in result] == ["Yellow Gadget"]

    result = filter_records(
        ROWS,
        STOCK_LEVELS_VIEW,
        filters={"status": "out-of-stock", "location": str(BACKROOM)},
    )
    assert result == []


def test_all_does_not_constrain():
    result = filter_records(
        ROWS,
        STOCK_LEVELS_VIEW,
        filters={"status": "all", "location": "all", "level": "all", "category": "all"},
    )
    assert result == ROWS


def test_unknown_filter_params_are_ignored():
    assert filter_records(ROWS, STOCK_LEVELS_VIEW, filters={"colour": "blue"}) == ROWS


def test_filter_does_not_modify_input():
    rows = list(ROWS)
    filter_records(rows, STOCK_LEVELS_VIEW, filters={"category": "Tools"})
    assert rows == ROWS


def test_level_filter_uses_derived_level():
    result = filter_records(ROWS, STOCK_LEVELS_VIEW, filters={"level": "over-max"})
    assert [r.product_name for r in result] == ["Green Gadget"]


# ── Date ranges ────────────────────────────────────

def test_date_range_start_buckets():
    assert date_range_start("today", NOW) == datetime(2024, 5, 15, tzinfo=timezone.utc)
    assert date_range_start("week", NOW) == datetime(2024, 5, 12, tzinfo=timezone.utc)
    assert date_range_start("month", NOW) == datetime(2024, 5, 1, tzinfo=timezone.utc)
    assert date_range_start("quarter", NOW) == datetime(2024, 4, 1, tzinfo=timezone.utc)
    assert date_range_start("decade", NOW) is None


def test_week_starts_on_sunday():
    sunday = datetime(2024, 5, 12, 9, tzinfo=timezone.utc)
    assert date_range_start("week", sunday) == datetime(2024, 5, 12, tzinfo=timezone.utc)


def test_date_filter_on_transfers():
    transfers = [
        SimpleNamespace(transfer_number="TR-1", requested_at=datetime(2024, 5, 15, 8, tzinfo=timezone.utc)),
        SimpleNamespace(transfer_number="TR-2", requested_at=datetime(2024, 5, 13, tzinfo=timezone.utc)),
        SimpleNamespace(transfer_number="TR-3", requested_at=datetime(2024, 4, 20, tzinfo=timezone.utc)),
        SimpleNamespace(transfer_number="TR-4", requested_at=datetime(2024, 2, 1)),  # naive, UTC
    ]

    def numbers(bucket):
        rows = filter_records(transfers, STOCK_TRANSFERS_VIEW, filters={"date": bucket}, now=NOW)
        return [t.transfer_number for t in rows]

    assert numbers("today") == ["TR-1"]
    assert numbers("week") == ["TR-1", "TR-2"]
    assert numbers("month") == ["TR-1", "TR-2"]
    assert numbers("quarter") == ["TR-1", "TR-2", "TR-3"]
    assert numbers("all") == ["TR-1", "TR-2", "TR-3", "TR-4"]
