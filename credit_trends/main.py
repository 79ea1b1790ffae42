"""
Credit Trends — FastAPI app factory with an empty session at startup.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from credit_trends import __version__
from credit_trends.config import LOG_LEVEL
from credit_trends.data.store import DataStore
from credit_trends.api.dependencies import set_store
from credit_trends.api.router_meta import router as meta_router
from credit_trends.api.router_upload import router as upload_router
from credit_trends.api.router_filters import router as filters_router
from credit_trends.api.router_dashboard import router as dashboard_router
from credit_trends.api.router_export import router as export_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start every process with a fresh, empty session."""
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    set_store(DataStore())
    logger.info("Credit Trends ready, no data yet. Upload a CSV via /api/upload.")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Credit Trends API",
        description="Tax credit utilization analytics — filtering, trends, exports",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(upload_router)
    app.include_router(filters_router)
    app.include_router(dashboard_router)
    app.include_router(export_router)

    return app


app = create_app()
