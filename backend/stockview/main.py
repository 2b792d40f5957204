import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockview.core.config import settings
from stockview.core.logging import configure_logging
from stockview.db.base import engine
from stockview.routes import api_router
from stockview.services.collections import CollectionCache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    app.state.cache = CollectionCache()
    logger.info(f"{settings.PROJECT_NAME} started")
    yield
    app.state.cache.clear()
    await engine.dispose()


app = FastAPI(
    title=f"{settings.PROJECT_NAME} API",
    description="Stock levels, alerts, transfers and warehouse inventory",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Location"],
)

app.include_router(api_router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "version": "0.1.0"}
