"""Stock alert and alert rule schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from stockview.models.alert import AlertSeverity, AlertStatus, AlertType


# ── Alerts ─────────────────────────────────────────
class StockAlertRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    stock_id: UUID
    product_name: str
    sku: str
    location_id: UUID
    location_name: str
    current_quantity: int
    reorder_point: int
    alert_type: str
    severity: str
    status: str
    created_at: datetime | None = None
    resolved_at: datetime | None = None
    notes: str | None = None

    @classmethod
    def from_model(cls, alert) -> "StockAlertRow":
        stock = alert.stock
        return cls(
            id=alert.id,
            stock_id=alert.stock_id,
            product_name=stock.product.name,
            sku=stock.product.sku,
            location_id=stock.location_id,
            location_name=stock.location.name,
            current_quantity=stock.quantity,
            reorder_point=stock.reorder_point,
            alert_type=alert.alert_type,
            severity=alert.severity,
            status=alert.status,
            created_at=alert.created_at,
            resolved_at=alert.resolved_at,
            notes=alert.notes,
        )


class StockAlertCreate(BaseModel):
    stock_id: UUID
    alert_type: AlertType
    severity: AlertSeverity = AlertSeverity.MEDIUM
    notes: str | None = Field(None, max_length=500)


class StockAlertUpdate(BaseModel):
    status: AlertStatus
    notes: str | None = Field(None, max_length=500)


# ── Alert rules ────────────────────────────────────
class AlertRuleCondition(BaseModel):
    type: Literal["stock_level", "stock_value", "stock_age"]
    operator: Literal["less_than", "greater_than", "equals", "between"]
    value: Decimal
    value2: Decimal | None = None

    @model_validator(mode="after")
    def check_between(self):
        if self.operator == "between" and self.value2 is None:
            raise ValueError("value2 is required for the 'between' operator")
        return self


class AlertRuleProducts(BaseModel):
    type: Literal["all", "category", "specific"] = "all"
    ids: list[UUID] = []
    categories: list[str] = []


NotificationChannel = Literal["email", "whatsapp", "phone", "slack", "browser"]


class AlertRuleCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    condition: AlertRuleCondition
    products: AlertRuleProducts = Field(default_factory=AlertRuleProducts)
    notification_channels: list[NotificationChannel] = Field(default_factory=list)


class AlertRuleUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    is_active: bool | None = None

    @field_validator("name", "is_active")
    @classmethod
    def not_null(cls, value):
        # Omit the field to leave it unchanged; the columns are NOT NULL
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class AlertRuleResponse(BaseModel):
    id: UUID
    name: str
    description: str | None
    condition: AlertRuleCondition
    products: AlertRuleProducts
    notification_channels: list[str]
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, rule) -> "AlertRuleResponse":
        return cls(
            id=rule.id,
            name=rule.name,
            description=rule.description,
            condition=AlertRuleCondition(
                type=rule.condition_type,
                operator=rule.operator,
                value=rule.value,
                value2=rule.value2,
            ),
            products=AlertRuleProducts(
                type=rule.product_scope,
                ids=rule.product_ids or [],
                categories=rule.categories or [],
            ),
            notification_channels=rule.notification_channels or [],
            is_active=rule.is_active,
            created_at=rule.created_at,
            updated_at=rule.updated_at,
        )


class AlertRuleMatch(BaseModel):
    stock_id: UUID
    product_name: str
    sku: str
    location_name: str
    measured_value: Decimal


class AlertRuleTestResponse(BaseModel):
    rule_id: UUID
    matches: list[AlertRuleMatch]
    count: int
