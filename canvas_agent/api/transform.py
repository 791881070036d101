"""POST /api/canvas-agent/transform: move, resize or rotate one shape."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from canvas_agent.config import Settings
from canvas_agent.dependencies import get_settings
from canvas_agent.models.requests import TransformRequest
from canvas_agent.models.responses import TransformResult
from canvas_agent.pipeline import resolve_transform_result

router = APIRouter()


@router.post("/canvas-agent/transform", response_model=TransformResult, response_model_exclude_none=True)
async def transform(req: TransformRequest, settings: Settings = Depends(get_settings)) -> TransformResult:
    return await resolve_transform_result(req, settings)
