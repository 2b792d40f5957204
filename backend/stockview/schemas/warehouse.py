"""Warehouse, location and warehouse inventory schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, computed_field

from stockview.listing.status import classify_stock_status


class WarehouseInventoryRow(BaseModel):
    id: UUID
    warehouse_id: UUID
    product_id: UUID
    product_name: str
    sku: str
    category: str | None = None
    location_id: UUID | None = None
    location_name: str | None = None
    quantity: int
    min_stock_level: int
    max_stock_level: int
    last_updated: datetime | None = None

    @computed_field
    @property
    def status(self) -> str:
        return classify_stock_status(self.quantity, self.min_stock_level)

    @classmethod
    def from_model(cls, item) -> "WarehouseInventoryRow":
        return cls(
            id=item.id,
            warehouse_id=item.warehouse_id,
            product_id=item.product_id,
            product_name=item.product.name,
            sku=item.product.sku,
            category=item.product.category,
            location_id=item.location_id,
            location_name=item.location.name if item.location is not None else None,
            quantity=item.quantity,
            min_stock_level=item.min_stock_level,
            max_stock_level=item.max_stock_level,
            last_updated=item.updated_at,
        )


def percent_used(utilization: int, capacity: int) -> float:
    if capacity <= 0:
        return 0.0
    return round(utilization / capacity * 100, 1)


class WarehouseRow(BaseModel):
    id: UUID
    name: str
    code: str
    city: str | None = None
    status: str
    capacity: int
    utilization: int
    is_default: bool = False

    @computed_field
    @property
    def utilization_percent(self) -> float:
        return percent_used(self.utilization, self.capacity)

    @classmethod
    def from_model(cls, warehouse) -> "WarehouseRow":
        return cls(
            id=warehouse.id,
            name=warehouse.name,
            code=warehouse.code,
            city=warehouse.city,
            status=warehouse.status,
            capacity=warehouse.capacity,
            utilization=warehouse.utilization,
            is_default=warehouse.is_default,
        )


class LocationRow(BaseModel):
    id: UUID
    warehouse_id: UUID | None = None
    name: str
    code: str
    type: str
    status: str
    capacity: int
    utilization: int

    @computed_field
    @property
    def utilization_percent(self) -> float:
        return percent_used(self.utilization, self.capacity)

    @classmethod
    def from_model(cls, location) -> "LocationRow":
        return cls(
            id=location.id,
            warehouse_id=location.warehouse_id,
            name=location.name,
            code=location.code,
            type=location.type,
            status=location.status,
            capacity=location.capacity,
            utilization=location.utilization,
        )
