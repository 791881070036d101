"""POST /api/shape-llm: placement for a single new shape."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from canvas_agent.config import Settings
from canvas_agent.dependencies import get_settings
from canvas_agent.models.requests import CreateRequest
from canvas_agent.models.responses import Placement
from canvas_agent.pipeline import resolve_placement

router = APIRouter()


@router.post("/shape-llm", response_model=Placement)
async def create(req: CreateRequest, settings: Settings = Depends(get_settings)) -> Placement:
    return await resolve_placement(req, settings)
