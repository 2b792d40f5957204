"""Product model."""

from decimal import Decimal

from sqlalchemy import String, Text, Numeric, Boolean, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stockview.db.base import Base
from stockview.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class Product(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "products"
    __table_args__ = (
        Index("ix_products_sku", "sku", unique=True),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    sku: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), index=True)
    description: Mapped[str | None] = mapped_column(Text)
    unit_cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    stock = relationship("Stock", back_populates="product", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Product {self.sku}: {self.name}>"
