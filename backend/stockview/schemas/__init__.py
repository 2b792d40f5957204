from stockview.schemas.listing import (
    ListingResponse, MutationResponse, BulkDeleteRequest, BulkDeleteResponse,
)
from stockview.schemas.stock import (
    StockRecord, StockLevelRow, StockAdjustment, StockStatsResponse,
)
from stockview.schemas.alert import (
    StockAlertRow, StockAlertCreate, StockAlertUpdate,
    AlertRuleCreate, AlertRuleUpdate, AlertRuleResponse, AlertRuleTestResponse,
)
from stockview.schemas.transfer import (
    StockTransferRow, StockTransferUpdate, WarehouseTransferRow,
)
from stockview.schemas.warehouse import WarehouseInventoryRow, WarehouseRow, LocationRow

__all__ = [
    "ListingResponse", "MutationResponse", "BulkDeleteRequest", "BulkDeleteResponse",
    "StockRecord", "StockLevelRow", "StockAdjustment", "StockStatsResponse",
    "StockAlertRow", "StockAlertCreate", "StockAlertUpdate",
    "AlertRuleCreate", "AlertRuleUpdate", "AlertRuleResponse", "AlertRuleTestResponse",
    "StockTransferRow", "StockTransferUpdate", "WarehouseTransferRow",
    "WarehouseInventoryRow", "WarehouseRow", "LocationRow",
]
