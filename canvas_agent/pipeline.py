"""Request pipeline: heuristic result first, then optional model augmentation.

Each resolve_* coroutine computes the deterministic answer, hands the same
inputs to the model when one is configured, and returns whichever survives
the output contract.
"""

from __future__ import annotations

import logging

from canvas_agent.config import Settings
from canvas_agent.engine.heuristics import (
    build_plan,
    layout_hints,
    place_new_shape,
    resolve_layout,
    resolve_transform,
    transform_intent,
)
from canvas_agent.intent.parser import parse_create
from canvas_agent.llm.augment import augment_or_fallback
from canvas_agent.llm.contracts import accept_layout, accept_placement, accept_plan, accept_transform
from canvas_agent.models.requests import AgentRequest, CreateRequest, LayoutRequest, TransformRequest
from canvas_agent.models.responses import LayoutResult, Placement, TransformResult
from canvas_agent.models.tool_steps import AgentPlan

logger = logging.getLogger(__name__)

# Upper bound on shapes / selection ids sent to the model
AGENT_PROMPT_LIMIT = 200
SINGLE_PROMPT_LIMIT = 150


def _dump(items, limit: int) -> list:
    return [item.model_dump(exclude_none=True) for item in items[:limit]]


async def resolve_placement(req: CreateRequest, settings: Settings) -> Placement:
    shape_hint = req.shape_hint or parse_create(req.message).shape
    fallback = place_new_shape(req.viewport, shape_hint)
    payload = {
        "message": req.message,
        "viewport": req.viewport.model_dump(),
        "shapeHint": shape_hint,
    }
    return await augment_or_fallback(settings, "create", payload, accept_placement(req.viewport), fallback)


async def resolve_transform_result(req: TransformRequest, settings: Settings) -> TransformResult:
    intent = transform_intent(req.message, req.hints)
    fallback = resolve_transform(req.viewport, req.shapes, intent)
    payload = {
        "message": req.message,
        "viewport": req.viewport.model_dump(),
        "hints": {"action": intent.action, "shape": intent.shape, "color": intent.color},
        "shapes": _dump(req.shapes, SINGLE_PROMPT_LIMIT),
    }
    accept = accept_transform([s.id for s in req.shapes], req.viewport)
    return await augment_or_fallback(settings, "transform", payload, accept, fallback)


async def resolve_layout_result(req: LayoutRequest, settings: Settings) -> LayoutResult:
    hints = layout_hints(req.message, req.hints)
    fallback = resolve_layout(req.shapes, req.selection_ids, hints)
    payload = {
        "message": req.message,
        "viewport": req.viewport.model_dump(),
        "hints": hints.model_dump(by_alias=True, exclude_none=True),
        "shapes": _dump(req.shapes, SINGLE_PROMPT_LIMIT),
        "selectionIds": (req.selection_ids or [])[:SINGLE_PROMPT_LIMIT],
    }
    accept = accept_layout([s.id for s in req.shapes])
    return await augment_or_fallback(settings, "layout", payload, accept, fallback)


async def resolve_agent_plan(req: AgentRequest, settings: Settings) -> AgentPlan:
    """Candidate steps for the orchestrated endpoint; arguments are validated downstream."""
    fallback = build_plan(req)
    payload = {
        "message": req.message,
        "viewportSize": req.viewport_size.model_dump(),
        "visibleCenter": req.visible_center.model_dump(),
        "shapes": _dump(req.shapes, AGENT_PROMPT_LIMIT),
        "selectionIds": req.selection_ids[:AGENT_PROMPT_LIMIT],
    }
    accept = accept_plan(s.id for s in req.shapes)
    return await augment_or_fallback(settings, "agent", payload, accept, fallback)
