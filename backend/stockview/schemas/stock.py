"""Stock schemas for request/response."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict

from stockview.core.config import Settings
from stockview.listing.status import (
    classify_stock_level,
    classify_stock_status,
    stock_level_thresholds,
)


class StockRecord(BaseModel):
    """Stock row as loaded from the database, without anything derived."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    product_id: UUID
    product_name: str
    sku: str
    category: str | None = None
    location_id: UUID
    location_name: str
    quantity: int
    reorder_point: int
    unit_cost: Decimal = Decimal("0")
    last_restocked: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, stock) -> "StockRecord":
        return cls(
            id=stock.id,
            product_id=stock.product_id,
            product_name=stock.product.name,
            sku=stock.product.sku,
            category=stock.product.category,
            location_id=stock.location_id,
            location_name=stock.location.name,
            quantity=stock.quantity,
            reorder_point=stock.reorder_point,
            unit_cost=stock.product.unit_cost or Decimal("0"),
            last_restocked=stock.last_restocked,
            updated_at=stock.updated_at,
        )


class StockLevelRow(StockRecord):
    """Stock row with its statuses and level thresholds, computed on read."""
    status: str
    level: str
    min_level: float
    max_level: float
    safety_stock: float
    preferred_level: float
    total_value: Decimal

    @classmethod
    def build(cls, record: StockRecord, config: Settings) -> "StockLevelRow":
        thresholds = stock_level_thresholds(
            record.reorder_point,
            over_max_multiplier=config.OVER_MAX_MULTIPLIER,
            min_level_ratio=config.MIN_LEVEL_RATIO,
            safety_stock_ratio=config.SAFETY_STOCK_RATIO,
            preferred_level_ratio=config.PREFERRED_LEVEL_RATIO,
        )
        return cls(
            **record.model_dump(),
            status=classify_stock_status(record.quantity, record.reorder_point),
            level=classify_stock_level(
                record.quantity, record.reorder_point, config.OVER_MAX_MULTIPLIER
            ),
            min_level=thresholds.min_level,
            max_level=thresholds.max_level,
            safety_stock=thresholds.safety_stock,
            preferred_level=thresholds.preferred_level,
            total_value=record.unit_cost * record.quantity,
        )


class StockAdjustment(BaseModel):
    """Schema for adjusting a stock quantity."""
    quantity_delta: int = Field(..., description="Change in quantity (positive=in, negative=out)")
    reason: str = Field(..., pattern="^(purchase|sale|adjustment|count|damage|return|transfer)$")
    note: str | None = Field(None, max_length=500)


class StockStatsResponse(BaseModel):
    total: int
    in_stock: int
    low_stock: int
    out_of_stock: int
    under_min: int
    optimal: int
    over_max: int
    total_value: Decimal
