"""Realm Status service main application."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from shared.observability import get_logger, setup_logging

from .api import health, realms
from .clients.battlenet import BattleNetClient
from .services.panel import RealmStatusPanels

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown of shared resources.
    """
    settings = app.state.settings

    logger.info(
        "Starting Realm Status service",
        version=settings.app_version,
        regions=list(settings.regions),
    )

    if not settings.battlenet.access_token:
        logger.warning("No API access token configured; panels will report an error")

    client = BattleNetClient(timeout=settings.battlenet.timeout_seconds)
    app.state.client = client
    app.state.panels = RealmStatusPanels(client, settings)

    logger.info("Realm Status service started successfully")

    yield

    # Cleanup
    logger.info("Shutting down Realm Status service")
    await app.state.panels.close()
    await client.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    setup_logging()

    app = FastAPI(
        title="Azeroth Codex - Realm Status",
        description="Connected realm status per region, flattened and sortable",
        version=settings.app_version,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(realms.router, prefix="/api/v1", tags=["Realms"])

    return app


app = create_app()
