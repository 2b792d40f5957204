"""SQLAlchemy models for StockView."""

from stockview.models.product import Product
from stockview.models.warehouse import Warehouse, Location, WarehouseInventoryItem
from stockview.models.stock import Stock
from stockview.models.alert import StockAlert, AlertRule
from stockview.models.transfer import (
    StockTransfer,
    StockTransferItem,
    WarehouseTransfer,
    WarehouseTransferItem,
)

__all__ = [
    "Product",
    "Warehouse",
    "Location",
    "WarehouseInventoryItem",
    "Stock",
    "StockAlert",
    "AlertRule",
    "StockTransfer",
    "StockTransferItem",
    "WarehouseTransfer",
    "WarehouseTransferItem",
]
