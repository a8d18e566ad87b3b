"""Lunara API - FastAPI application entry point.

Run locally:
    uvicorn lunara.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lunara.analytics.config_loader import get_analytics_config
from lunara.config import get_settings
from lunara.middleware.auth import JWTAuthMiddleware
from lunara.routers import health, moods, periods
from lunara.services.database import close_pool, init_pool

# ---------- Logging ----------

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)-8s %(name)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger("lunara")


# ---------- Lifespan ----------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup / shutdown hooks."""
    settings = get_settings()
    logger.info(
        "Starting Lunara API v%s [%s]",
        settings.app_version,
        settings.environment,
    )
    get_analytics_config()  # fail fast on a broken analytics_config.yaml
    await init_pool(settings)
    yield
    await close_pool()
    logger.info("Lunara API shut down")


# ---------- App factory ----------

def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Lunara API",
        description="Period and mood tracking with cycle statistics and predictions.",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ---------- Middleware (last added is outermost) ----------

    app.add_middleware(JWTAuthMiddleware, settings=settings)

    # CORS wraps auth so preflight and 401 responses carry CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------- Health check (outside v1 prefix - always at /health) ----------
    app.include_router(health.router)

    # ---------- API v1 routes ----------
    v1_prefix = "/api/v1"

    app.include_router(periods.router, prefix=v1_prefix)
    app.include_router(moods.router, prefix=v1_prefix)

    return app


app = create_app()
