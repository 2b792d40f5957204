"""Initial database schema - products, warehouses, locations, stock, alerts, alert rules, transfers

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # --- Products ---
    op.create_table(
        "products",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("sku", sa.String(100), nullable=False),
        sa.Column("category", sa.String(100)),
        sa.Column("description", sa.Text),
        sa.Column("unit_cost", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )
    op.create_index("ix_products_sku", "products", ["sku"], unique=True)
    op.create_index("ix_products_name", "products", ["name"])
    op.create_index("ix_products_category", "products", ["category"])

    # --- Warehouses ---
    op.create_table(
        "warehouses",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("code", sa.String(50), nullable=False, unique=True),
        sa.Column("city", sa.String(100)),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("capacity", sa.Integer, nullable=False, server_default="0"),
        sa.Column("utilization", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_default", sa.Boolean, nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )
    op.create_index("ix_warehouses_code", "warehouses", ["code"])

    # --- Locations ---
    op.create_table(
        "locations",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("code", sa.String(50), nullable=False, unique=True),
        sa.Column("type", sa.String(20), nullable=False, server_default="zone"),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("capacity", sa.Integer, nullable=False, server_default="0"),
        sa.Column("utilization", sa.Integer, nullable=False, server_default="0"),
        sa.Column("warehouse_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("warehouses.id", ondelete="CASCADE")),
        *_timestamps(),
    )
    op.create_index("ix_locations_code", "locations", ["code"])
    op.create_index("ix_locations_warehouse_id", "locations", ["warehouse_id"])

    # --- Stock ---
    op.create_table(
        "stock",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("quantity", sa.Integer, nullable=False, server_default="0"),
        sa.Column("reorder_point", sa.Integer, nullable=False, server_default="10"),
        sa.Column("last_restocked", sa.DateTime(timezone=True)),
        sa.Column("notes", sa.Text),
        sa.Column("product_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
        sa.Column("location_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("locations.id", ondelete="RESTRICT"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("product_id", "location_id", name="uq_stock_product_location"),
    )
    op.create_index("ix_stock_product_id", "stock", ["product_id"])
    op.create_index("ix_stock_location_id", "stock", ["location_id"])

    # --- Warehouse inventory ---
    op.create_table(
        "warehouse_inventory",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("quantity", sa.Integer, nullable=False, server_default="0"),
        sa.Column("min_stock_level", sa.Integer, nullable=False, server_default="0"),
        sa.Column("max_stock_level", sa.Integer, nullable=False, server_default="0"),
        sa.Column("warehouse_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("warehouses.id", ondelete="CASCADE"), nullable=False),
        sa.Column("product_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
        sa.Column("location_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("locations.id", ondelete="SET NULL")),
        *_timestamps(),
        sa.UniqueConstraint("warehouse_id", "product_id", "location_id", name="uq_warehouse_inventory_slot"),
    )
    op.create_index("ix_warehouse_inventory_warehouse_id", "warehouse_inventory", ["warehouse_id"])

    # --- Stock alerts ---
    op.create_table(
        "stock_alerts",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("alert_type", sa.String(20), nullable=False),
        sa.Column("severity", sa.String(10), nullable=False, server_default="medium"),
        sa.Column("status", sa.String(10), nullable=False, server_default="active"),
        sa.Column("resolved_at", sa.DateTime(timezone=True)),
        sa.Column("notes", sa.Text),
        sa.Column("stock_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("stock.id", ondelete="CASCADE"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_stock_alerts_status", "stock_alerts", ["status"])
    op.create_index("ix_stock_alerts_stock_id", "stock_alerts", ["stock_id"])

    # --- Alert rules ---
    op.create_table(
        "alert_rules",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("condition_type", sa.String(20), nullable=False),
        sa.Column("operator", sa.String(20), nullable=False),
        sa.Column("value", sa.Numeric(14, 2), nullable=False),
        sa.Column("value2", sa.Numeric(14, 2)),
        sa.Column("product_scope", sa.String(20), nullable=False, server_default="all"),
        sa.Column("product_ids", postgresql.JSONB),
        sa.Column("categories", postgresql.JSONB),
        sa.Column("notification_channels", postgresql.JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.text("true")),
        *_timestamps(),
    )

    # --- Stock transfers ---
    op.create_table(
        "stock_transfers",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("transfer_number", sa.String(50), nullable=False, unique=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("requested_by", sa.String(255), nullable=False),
        sa.Column("requested_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True)),
        sa.Column("notes", sa.Text),
        sa.Column("source_location_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("locations.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("destination_location_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("locations.id", ondelete="RESTRICT"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_stock_transfers_transfer_number", "stock_transfers", ["transfer_number"])

    op.create_table(
        "stock_transfer_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("transfer_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("stock_transfers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("stock_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("stock.id", ondelete="CASCADE"), nullable=False),
    )
    op.create_index("ix_stock_transfer_items_transfer_id", "stock_transfer_items", ["transfer_id"])

    # --- Warehouse transfers ---
    op.create_table(
        "warehouse_transfers",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("initiated_by", sa.String(255), nullable=False),
        sa.Column("approved_by", sa.String(255)),
        sa.Column("initiated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True)),
        sa.Column("estimated_arrival", sa.DateTime(timezone=True)),
        sa.Column("tracking_number", sa.String(100)),
        sa.Column("notes", sa.Text),
        sa.Column("source_warehouse_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("warehouses.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("destination_warehouse_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("warehouses.id", ondelete="RESTRICT"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_warehouse_transfers_tracking_number", "warehouse_transfers", ["tracking_number"])

    op.create_table(
        "warehouse_transfer_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("received_quantity", sa.Integer),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("transfer_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("warehouse_transfers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("product_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
    )
    op.create_index("ix_warehouse_transfer_items_transfer_id", "warehouse_transfer_items", ["transfer_id"])


def downgrade() -> None:
    op.drop_table("warehouse_transfer_items")
    op.drop_table("warehouse_transfers")
    op.drop_table("stock_transfer_items")
    op.drop_table("stock_transfers")
    op.drop_table("alert_rules")
    op.drop_table("stock_alerts")
    op.drop_table("warehouse_inventory")
    op.drop_table("stock")
    op.drop_table("locations")
    op.drop_table("warehouses")
    op.drop_table("products")
