"""Stock model: quantity of one product at one location."""

import uuid
from datetime import datetime

from sqlalchemy import Integer, ForeignKey, DateTime, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stockview.db.base import Base
from stockview.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class Stock(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "stock"
    __table_args__ = (
        UniqueConstraint("product_id", "location_id", name="uq_stock_product_location"),
    )

    quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    reorder_point: Mapped[int] = mapped_column(Integer, default=10, nullable=False)
    last_restocked: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    notes: Mapped[str | None] = mapped_column(Text)

    # Foreign keys
    product_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    location_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("locations.id", ondelete="RESTRICT"), nullable=False, index=True
    )

    # Relationships
    product = relationship("Product", back_populates="stock", lazy="selectin")
    location = relationship("Location", lazy="selectin")
    alerts = relationship(
        "StockAlert", back_populates="stock", lazy="selectin", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Stock product={self.product_id} location={self.location_id} qty={self.quantity}>"
