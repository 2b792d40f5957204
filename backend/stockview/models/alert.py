"""Stock alerts and the rules that describe when to raise them."""

import enum
import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, Text, Numeric, Boolean, ForeignKey, DateTime
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stockview.db.base import Base
from stockview.models.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class AlertType(str, enum.Enum):
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"
    REORDER_POINT = "reorder-point"


class AlertSeverity(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AlertStatus(str, enum.Enum):
    ACTIVE = "active"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class StockAlert(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "stock_alerts"

    alert_type: Mapped[str] = mapped_column(String(20), nullable=False)
    severity: Mapped[str] = mapped_column(String(10), default=AlertSeverity.MEDIUM.value, nullable=False)
    status: Mapped[str] = mapped_column(
        String(10), default=AlertStatus.ACTIVE.value, nullable=False, index=True
    )
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    notes: Mapped[str | None] = mapped_column(Text)

    stock_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("stock.id", ondelete="CASCADE"), nullable=False, index=True
    )

    stock = relationship("Stock", back_populates="alerts", lazy="selectin")

    def __repr__(self) -> str:
        return f"<StockAlert {self.alert_type} stock={self.stock_id} {self.status}>"


class AlertRule(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A user-defined condition, e.g. "stock level less than 5 for Electronics"."""

    __tablename__ = "alert_rules"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    # Condition
    condition_type: Mapped[str] = mapped_column(String(20), nullable=False)
    operator: Mapped[str] = mapped_column(String(20), nullable=False)
    value: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    value2: Mapped[Decimal | None] = mapped_column(Numeric(14, 2))

    # Which products the rule watches
    product_scope: Mapped[str] = mapped_column(String(20), default="all", nullable=False)
    product_ids: Mapped[list | None] = mapped_column(JSONB, default=None)
    categories: Mapped[list | None] = mapped_column(JSONB, default=None)

    notification_channels: Mapped[list] = mapped_column(JSONB, default=list, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<AlertRule {self.name}: {self.condition_type} {self.operator} {self.value}>"
