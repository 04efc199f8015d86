"""Realm status API endpoints.

These endpoints are the renderer boundary: they expose each region panel's
FetchState, its sort state and the sorted row view.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel, Field

from shared.models import (
    FetchPhase,
    RealmRow,
    RealmStatusSummary,
    SortColumn,
    SortState,
)
from shared.observability import get_logger

from ..services.panel import RealmStatusPanel, RealmStatusPanels

logger = get_logger(__name__)

router = APIRouter()


class RegionListResponse(BaseModel):
    """Configured regions."""

    regions: list[str]
    default_region: str


class SortRequest(BaseModel):
    """Column header click."""

    column: SortColumn = Field(description="Column to sort by")


class RealmStatusResponse(BaseModel):
    """A region panel as seen by a renderer."""

    region: str
    phase: FetchPhase
    error_message: str | None = None
    empty_message: str | None = None
    sort: SortState
    summary: RealmStatusSummary
    rows: list[RealmRow] = Field(default_factory=list)


def _get_panel(request: Request, region: str) -> RealmStatusPanel:
    panels: RealmStatusPanels = request.app.state.panels
    panel = panels.get(region)
    if panel is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": "REGION_NOT_FOUND",
                "message": f"Region '{region}' is not configured",
            },
        )
    return panel


def _to_response(panel: RealmStatusPanel) -> RealmStatusResponse:
    state = panel.state
    return RealmStatusResponse(
        region=panel.region or "",
        phase=state.phase,
        error_message=state.error_message,
        empty_message=panel.empty_message,
        sort=panel.sort_state,
        summary=panel.summary,
        rows=panel.sorted_rows,
    )


@router.get(
    "/regions",
    response_model=RegionListResponse,
    summary="List configured regions",
)
async def list_regions(request: Request):
    panels: RealmStatusPanels = request.app.state.panels
    return RegionListResponse(
        regions=panels.regions,
        default_region=panels.settings.default_region,
    )


@router.get(
    "/regions/{region}/realms",
    response_model=RealmStatusResponse,
    summary="Get realm status for a region",
    description="Starts the region's pipeline on first access and waits for it to settle.",
)
async def get_realm_status(request: Request, region: str):
    panel = _get_panel(request, region)
    await panel.wait_until_settled()
    return _to_response(panel)


@router.post(
    "/regions/{region}/sort",
    response_model=RealmStatusResponse,
    summary="Sort a region's realms by a column",
)
async def sort_realms(request: Request, region: str, sort_request: SortRequest):
    panel = _get_panel(request, region)
    panel.request_sort(sort_request.column)
    logger.debug(
        "Sort requested",
        region=panel.region,
        column=panel.sort_state.column,
        direction=panel.sort_state.direction,
    )
    return _to_response(panel)


@router.post(
    "/regions/{region}/refresh",
    response_model=RealmStatusResponse,
    summary="Reload a region's realm status",
)
async def refresh_realms(request: Request, region: str):
    panel = _get_panel(request, region)
    panel.refresh()
    await panel.wait_until_settled()
    return _to_response(panel)
