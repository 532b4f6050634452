"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from funnelsight.config import Settings
from funnelsight.dependencies import get_settings, policy_from_settings
from funnelsight.engine.registry import get_registry
from funnelsight.engine.template.catalog import default_registry
from funnelsight.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        heuristics_registered=get_registry().count,
        templates_registered=len(default_registry()),
        geometry_locked=policy_from_settings(settings).geometry_locked,
    )
