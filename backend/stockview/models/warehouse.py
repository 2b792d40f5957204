"""Warehouses, their storage locations and per-warehouse inventory."""

import enum
import uuid

from sqlalchemy import String, Integer, ForeignKey, Boolean, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stockview.db.base import Base
from stockview.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class WarehouseStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    MAINTENANCE = "maintenance"


class LocationType(str, enum.Enum):
    ZONE = "zone"
    AISLE = "aisle"
    SECTION = "section"
    SHELF = "shelf"
    BIN = "bin"


class LocationStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    MAINTENANCE = "maintenance"
    RESERVED = "reserved"


class Warehouse(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "warehouses"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    city: Mapped[str | None] = mapped_column(String(100))
    status: Mapped[str] = mapped_column(String(20), default=WarehouseStatus.ACTIVE.value, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    # Units currently stored, out of capacity
    utilization: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Relationships
    locations = relationship("Location", back_populates="warehouse", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Warehouse {self.code}: {self.name}>"


class Location(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A place stock can sit: a zone, aisle, shelf or bin inside a warehouse."""

    __tablename__ = "locations"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(20), default=LocationType.ZONE.value, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=LocationStatus.ACTIVE.value, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    utilization: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    warehouse_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("warehouses.id", ondelete="CASCADE"), index=True
    )

    warehouse = relationship("Warehouse", back_populates="locations")

    def __repr__(self) -> str:
        return f"<Location {self.code}: {self.name}>"


class WarehouseInventoryItem(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "warehouse_inventory"
    __table_args__ = (
        UniqueConstraint("warehouse_id", "product_id", "location_id", name="uq_warehouse_inventory_slot"),
    )

    quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    min_stock_level: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    max_stock_level: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Foreign keys
    warehouse_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("warehouses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    location_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("locations.id", ondelete="SET NULL")
    )

    # Relationships
    warehouse = relationship("Warehouse")
    product = relationship("Product", lazy="selectin")
    location = relationship("Location", lazy="selectin")

    def __repr__(self) -> str:
        return f"<WarehouseInventoryItem warehouse={self.warehouse_id} product={self.product_id} qty={self.quantity}>"
