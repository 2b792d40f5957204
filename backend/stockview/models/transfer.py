"""Transfers: stock moved between locations, and shipments between warehouses."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import String, Text, Integer, ForeignKey, DateTime, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stockview.db.base import Base
from stockview.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class StockTransferStatus(str, enum.Enum):
    DRAFT = "draft"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class WarehouseTransferStatus(str, enum.Enum):
    DRAFT = "draft"
    PENDING = "pending"
    IN_TRANSIT = "in-transit"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# ── Location to location ────────────────────────────

class StockTransfer(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "stock_transfers"

    transfer_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), default=StockTransferStatus.DRAFT.value, nullable=False)
    requested_by: Mapped[str] = mapped_column(String(255), nullable=False)
    requested_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    notes: Mapped[str | None] = mapped_column(Text)

    source_location_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("locations.id", ondelete="RESTRICT"), nullable=False
    )
    destination_location_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("locations.id", ondelete="RESTRICT"), nullable=False
    )

    source_location = relationship("Location", foreign_keys=[source_location_id], lazy="selectin")
    destination_location = relationship("Location", foreign_keys=[destination_location_id], lazy="selectin")
    items = relationship(
        "StockTransferItem", back_populates="transfer", lazy="selectin", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<StockTransfer {self.transfer_number} {self.status}>"


class StockTransferItem(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "stock_transfer_items"

    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    transfer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("stock_transfers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    stock_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("stock.id", ondelete="CASCADE"), nullable=False
    )

    transfer = relationship("StockTransfer", back_populates="items")
    stock = relationship("Stock", lazy="selectin")


# ── Warehouse to warehouse ──────────────────────────

class WarehouseTransfer(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "warehouse_transfers"

    status: Mapped[str] = mapped_column(
        String(20), default=WarehouseTransferStatus.DRAFT.value, nullable=False
    )
    initiated_by: Mapped[str] = mapped_column(String(255), nullable=False)
    approved_by: Mapped[str | None] = mapped_column(String(255))
    initiated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    estimated_arrival: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    tracking_number: Mapped[str | None] = mapped_column(String(100), index=True)
    notes: Mapped[str | None] = mapped_column(Text)

    source_warehouse_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("warehouses.id", ondelete="RESTRICT"), nullable=False
    )
    destination_warehouse_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("warehouses.id", ondelete="RESTRICT"), nullable=False
    )

    source_warehouse = relationship("Warehouse", foreign_keys=[source_warehouse_id], lazy="selectin")
    destination_warehouse = relationship(
        "Warehouse", foreign_keys=[destination_warehouse_id], lazy="selectin"
    )
    items = relationship(
        "WarehouseTransferItem", back_populates="transfer", lazy="selectin", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<WarehouseTransfer {self.id} {self.status}>"


class WarehouseTransferItem(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "warehouse_transfer_items"

    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    received_quantity: Mapped[int | None] = mapped_column(Integer)
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)

    transfer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("warehouse_transfers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )

    transfer = relationship("WarehouseTransfer", back_populates="items")
    product = relationship("Product", lazy="selectin")
