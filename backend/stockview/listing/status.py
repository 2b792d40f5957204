"""Status classification derived from quantities and reorder points.

Statuses are computed on every read and never stored, so they cannot drift
from the quantity they describe.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Callable, Iterable

IN_STOCK = "in-stock"
LOW_STOCK = "low-stock"
OUT_OF_STOCK = "out-of-stock"
STOCK_STATUSES = (IN_STOCK, LOW_STOCK, OUT_OF_STOCK)

UNDER_MIN = "under-min"
OPTIMAL = "optimal"
OVER_MAX = "over-max"
STOCK_LEVELS = (UNDER_MIN, OPTIMAL, OVER_MAX)

DEFAULT_OVER_MAX_MULTIPLIER = 2.0


def classify_stock_status(quantity: float, reorder_point: float) -> str:
    """Out of stock at zero, low stock up to and including the reorder point."""
    if quantity <= 0:
        return OUT_OF_STOCK
    if quantity <= reorder_point:
        return LOW_STOCK
    return IN_STOCK


def classify_stock_level(
    quantity: float,
    reorder_point: float,
    over_max_multiplier: float = DEFAULT_OVER_MAX_MULTIPLIER,
) -> str:
    """Under min below the reorder point, over max above reorder point x multiplier."""
    if quantity < reorder_point:
        return UNDER_MIN
    if quantity > reorder_point * over_max_multiplier:
        return OVER_MAX
    return OPTIMAL


@dataclass(frozen=True)
class StockLevelThresholds:
    min_level: float
    max_level: float
    safety_stock: float
    preferred_level: float


def stock_level_thresholds(
    reorder_point: float,
    over_max_multiplier: float = DEFAULT_OVER_MAX_MULTIPLIER,
    min_level_ratio: float = 0.8,
    safety_stock_ratio: float = 0.5,
    preferred_level_ratio: float = 1.5,
) -> StockLevelThresholds:
    return StockLevelThresholds(
        min_level=reorder_point * min_level_ratio,
        max_level=reorder_point * over_max_multiplier,
        safety_stock=reorder_point * safety_stock_ratio,
        preferred_level=reorder_point * preferred_level_ratio,
    )


def count_statuses(
    records: Iterable,
    classify: Callable[[object], str],
    statuses: Iterable[str] = STOCK_STATUSES,
) -> dict[str, int]:
    """Count records per derived status; every known status is present, even at 0."""
    counts = Counter(classify(record) for record in records)
    result = {status: counts.get(status, 0) for status in statuses}
    result["total"] = sum(counts.values())
    return result
