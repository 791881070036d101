"""POST /api/canvas-agent/layout: distribute shapes in a row or column."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from canvas_agent.config import Settings
from canvas_agent.dependencies import get_settings
from canvas_agent.models.requests import LayoutRequest
from canvas_agent.models.responses import LayoutResult
from canvas_agent.pipeline import resolve_layout_result

router = APIRouter()


@router.post("/canvas-agent/layout", response_model=LayoutResult)
async def layout(req: LayoutRequest, settings: Settings = Depends(get_settings)) -> LayoutResult:
    return await resolve_layout_result(req, settings)
