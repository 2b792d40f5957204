"""Database loaders for the list view collections."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stockview.models.alert import StockAlert
from stockview.models.stock import Stock
from stockview.models.transfer import StockTransfer, WarehouseTransfer
from stockview.models.warehouse import Location, Warehouse, WarehouseInventoryItem
from stockview.schemas.alert import StockAlertRow
from stockview.schemas.stock import StockRecord
from stockview.schemas.transfer import StockTransferRow, WarehouseTransferRow
from stockview.schemas.warehouse import LocationRow, WarehouseInventoryRow, WarehouseRow


async def load_stock(db: AsyncSession) -> list[StockRecord]:
    result = await db.execute(select(Stock).order_by(Stock.created_at, Stock.id))
    return [StockRecord.from_model(stock) for stock in result.scalars().all()]


async def load_stock_alerts(db: AsyncSession) -> list[StockAlertRow]:
    result = await db.execute(select(StockAlert).order_by(StockAlert.created_at, StockAlert.id))
    return [StockAlertRow.from_model(alert) for alert in result.scalars().all()]


async def load_stock_transfers(db: AsyncSession) -> list[StockTransferRow]:
    result = await db.execute(
        select(StockTransfer).order_by(StockTransfer.requested_at, StockTransfer.id)
    )
    return [StockTransferRow.from_model(t) for t in result.scalars().all()]


async def load_warehouse_transfers(db: AsyncSession) -> list[WarehouseTransferRow]:
    result = await db.execute(
        select(WarehouseTransfer).order_by(WarehouseTransfer.initiated_at, WarehouseTransfer.id)
    )
    return [WarehouseTransferRow.from_model(t) for t in result.scalars().all()]


async def load_warehouse_inventory(db: AsyncSession, warehouse_id: UUID) -> list[WarehouseInventoryRow]:
    result = await db.execute(
        select(WarehouseInventoryItem)
        .where(WarehouseInventoryItem.warehouse_id == warehouse_id)
        .order_by(WarehouseInventoryItem.created_at, WarehouseInventoryItem.id)
    )
    return [WarehouseInventoryRow.from_model(item) for item in result.scalars().all()]


async def load_warehouses(db: AsyncSession) -> list[WarehouseRow]:
    result = await db.execute(select(Warehouse).order_by(Warehouse.created_at, Warehouse.id))
    return [WarehouseRow.from_model(warehouse) for warehouse in result.scalars().all()]


async def load_warehouse_locations(db: AsyncSession, warehouse_id: UUID) -> list[LocationRow]:
    result = await db.execute(
        select(Location)
        .where(Location.warehouse_id == warehouse_id)
        .order_by(Location.created_at, Location.id)
    )
    return [LocationRow.from_model(location) for location in result.scalars().all()]
