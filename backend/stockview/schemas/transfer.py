"""Transfer schemas for list rows and status updates."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, computed_field

from stockview.models.transfer import StockTransferStatus


class StockTransferItemRow(BaseModel):
    id: UUID
    stock_id: UUID
    product_name: str
    sku: str
    quantity: int


class StockTransferRow(BaseModel):
    id: UUID
    transfer_number: str
    status: str
    source_location_id: UUID
    source_location_name: str
    destination_location_id: UUID
    destination_location_name: str
    requested_by: str
    requested_at: datetime
    completed_at: datetime | None = None
    notes: str | None = None
    items: list[StockTransferItemRow] = []

    @computed_field
    @property
    def item_count(self) -> int:
        return len(self.items)

    @classmethod
    def from_model(cls, transfer) -> "StockTransferRow":
        return cls(
            id=transfer.id,
            transfer_number=transfer.transfer_number,
            status=transfer.status,
            source_location_id=transfer.source_location_id,
            source_location_name=transfer.source_location.name,
            destination_location_id=transfer.destination_location_id,
            destination_location_name=transfer.destination_location.name,
            requested_by=transfer.requested_by,
            requested_at=transfer.requested_at,
            completed_at=transfer.completed_at,
            notes=transfer.notes,
            items=[
                StockTransferItemRow(
                    id=item.id,
                    stock_id=item.stock_id,
                    product_name=item.stock.product.name,
                    sku=item.stock.product.sku,
                    quantity=item.quantity,
                )
                for item in transfer.items
            ],
        )


class StockTransferUpdate(BaseModel):
    status: StockTransferStatus
    notes: str | None = Field(None, max_length=500)


class WarehouseTransferItemRow(BaseModel):
    id: UUID
    product_id: UUID
    product_name: str
    quantity: int
    received_quantity: int | None = None
    status: str


class WarehouseTransferRow(BaseModel):
    id: UUID
    status: str
    source_warehouse_id: UUID
    source_warehouse_name: str
    destination_warehouse_id: UUID
    destination_warehouse_name: str
    initiated_by: str
    approved_by: str | None = None
    initiated_at: datetime
    completed_at: datetime | None = None
    estimated_arrival: datetime | None = None
    tracking_number: str | None = None
    notes: str | None = None
    items: list[WarehouseTransferItemRow] = []

    @computed_field
    @property
    def item_count(self) -> int:
        return len(self.items)

    @classmethod
    def from_model(cls, transfer) -> "WarehouseTransferRow":
        return cls(
            id=transfer.id,
            status=transfer.status,
            source_warehouse_id=transfer.source_warehouse_id,
            source_warehouse_name=transfer.source_warehouse.name,
            destination_warehouse_id=transfer.destination_warehouse_id,
            destination_warehouse_name=transfer.destination_warehouse.name,
            initiated_by=transfer.initiated_by,
            approved_by=transfer.approved_by,
            initiated_at=transfer.initiated_at,
            completed_at=transfer.completed_at,
            estimated_arrival=transfer.estimated_arrival,
            tracking_number=transfer.tracking_number,
            notes=transfer.notes,
            items=[
                WarehouseTransferItemRow(
                    id=item.id,
                    product_id=item.product_id,
                    product_name=item.product.name,
                    quantity=item.quantity,
                    received_quantity=item.received_quantity,
                    status=item.status,
                )
                for item in transfer.items
            ],
        )
