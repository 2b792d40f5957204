from fastapi import APIRouter
from stockview.api.alerts import router as alerts_router
from stockview.api.stock import router as stock_router
from stockview.api.transfers import router as transfers_router
from stockview.api.warehousing import router as warehousing_router

api_router = APIRouter(prefix="/api/v1")
# Fixed /stock/... paths are registered before /stock/{stock_id}
api_router.include_router(alerts_router)
api_router.include_router(transfers_router)
api_router.include_router(stock_router)
api_router.include_router(warehousing_router)
