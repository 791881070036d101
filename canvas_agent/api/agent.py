"""POST /api/canvas-agent: multi-step plan (JSON + streaming)."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from canvas_agent.config import Settings
from canvas_agent.dependencies import get_settings
from canvas_agent.engine.validation import validate_steps
from canvas_agent.models.requests import AgentRequest
from canvas_agent.models.responses import PlanResponse
from canvas_agent.pipeline import resolve_agent_plan
from canvas_agent.stream.events import stream_plan

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/canvas-agent", response_model=PlanResponse, response_model_exclude_none=True)
async def agent_plan(req: AgentRequest, settings: Settings = Depends(get_settings)) -> PlanResponse:
    plan = await resolve_agent_plan(req, settings)
    steps = validate_steps(plan.steps, req.viewport_size)
    return PlanResponse(steps=[step.to_wire() for step in steps], say=plan.say)


@router.post("/canvas-agent/stream")
async def agent_stream(
    req: AgentRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
) -> StreamingResponse:
    logger.info(
        "Agent stream: %d shapes, %d selected, viewport %gx%g",
        len(req.shapes),
        len(req.selection_ids),
        req.viewport_size.w,
        req.viewport_size.h,
    )

    async def _resolve():
        return await resolve_agent_plan(req, settings)

    return StreamingResponse(
        stream_plan(
            _resolve,
            req.viewport_size,
            is_disconnected=request.is_disconnected,
            verbose=settings.debug_events,
        ),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
