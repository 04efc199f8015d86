"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "realm-status"}


@router.get("/ready")
async def readiness_check(request: Request) -> dict:
    """Readiness check - reports whether an API token is configured."""
    settings = request.app.state.settings

    if settings.battlenet.access_token:
        return {"status": "ready", "credential": "configured"}
    return {"status": "not_ready", "credential": "missing"}
