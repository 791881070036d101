"""Heuristic resolver: deterministic, model-free plans from hints + shape state.

Always produces a usable result. The augmentation layer computes this first
and keeps it as the fallback.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from canvas_agent.engine.geometry import clamp_size, median, round_px
from canvas_agent.engine.targeting import layout_targets, pick_target, selected_or_all
from canvas_agent.intent.aliases import CREATE_GEO, TARGET_KIND_RULES, resolve_color
from canvas_agent.intent.parser import (
    ACTION_RULES,
    parse_angle,
    parse_create,
    parse_layout,
    parse_transform,
    wants_recolor,
)
from canvas_agent.models.canvas import LayoutShape, Shape, Size, Viewport
from canvas_agent.models.requests import AgentRequest, LayoutHints, TransformHints
from canvas_agent.models.responses import (
    LayoutMove,
    LayoutResult,
    MoveBlock,
    Placement,
    ResizeBlock,
    RotateBlock,
    TransformResult,
)
from canvas_agent.models.tool_steps import AgentPlan, ToolStep

logger = logging.getLogger(__name__)

DEFAULT_SIZE = (200, 120)
CIRCLE_SIZE = (160, 160)
DEFAULT_ROTATION_DEG = 45.0
NO_INTENT_NOTE = "(note) No intent detected."


def default_size(shape: str | None) -> tuple[int, int]:
    return CIRCLE_SIZE if shape == "circle" else DEFAULT_SIZE


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

def place_new_shape(viewport: Viewport, shape_hint: str | None) -> Placement:
    """Default placement centered in the viewport."""
    w, h = default_size(shape_hint)
    cx, cy = viewport.center
    return Placement(x=round_px(cx - w / 2), y=round_px(cy - h / 2), w=w, h=h)


# ---------------------------------------------------------------------------
# Transform
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TransformIntent:
    action: str = "move"
    shape: str | None = None
    color: str | None = None
    angle: float | None = None
    angle_mode: str = "by"
    angle_unit: str = "deg"


def transform_intent(message: str, hints: TransformHints | None) -> TransformIntent:
    """Client hints win; anything they leave out is parsed from the message."""
    parsed = parse_transform(message)
    angle = parse_angle(message)
    return TransformIntent(
        action=(hints and hints.action) or parsed.action or "move",
        shape=(hints and hints.shape) or parsed.shape_hint,
        color=(hints and hints.color) or parsed.color_hint,
        angle=angle.get("angle"),
        angle_mode=angle.get("angle_mode", "by"),
        angle_unit=angle.get("angle_unit", "deg"),
    )


def rotation_args(intent: TransformIntent) -> dict[str, Any]:
    if intent.angle is None:
        return {"by": DEFAULT_ROTATION_DEG, "unit": "deg"}
    return {intent.angle_mode: intent.angle, "unit": intent.angle_unit}


def doubled_size(shape: Shape, container_w: float, container_h: float) -> tuple[int, int]:
    w, h = clamp_size(container_w, container_h, shape.bounds.w * 2, shape.bounds.h * 2)
    return round_px(w), round_px(h)


def resolve_transform(
    viewport: Viewport,
    shapes: Sequence[Shape],
    intent: TransformIntent,
) -> TransformResult:
    target = pick_target(shapes, intent.shape, intent.color)
    if target is None:
        raise ValueError("transform needs at least one shape")

    if intent.action == "resize":
        w, h = doubled_size(target, viewport.w, viewport.h)
        return TransformResult(action="resize", shape_id=target.id, resize=ResizeBlock(to={"w": w, "h": h}))

    if intent.action == "rotate":
        return TransformResult(action="rotate", shape_id=target.id, rotate=RotateBlock(**rotation_args(intent)))

    cx, cy = viewport.center
    return TransformResult(
        action="move",
        shape_id=target.id,
        move=MoveBlock(to={"x": round_px(cx), "y": round_px(cy)}),
    )


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

def resolve_layout(
    shapes: Sequence[LayoutShape],
    selection_ids: Sequence[str] | None,
    hints: LayoutHints,
) -> LayoutResult:
    """Distribute the target set along one axis.

    Targets are sorted by leading edge. Every shape is centered on the median
    perpendicular center. An explicit gap is used as-is, otherwise the current
    span is shared out evenly.
    """
    targets = layout_targets(shapes, selection_ids, hints.target)
    if len(targets) < 2:
        return LayoutResult()

    row = (hints.axis or "row") == "row"

    def lead(s: LayoutShape) -> float:
        return s.bounds.x if row else s.bounds.y

    def extent(s: LayoutShape) -> float:
        return s.bounds.w if row else s.bounds.h

    def cross_extent(s: LayoutShape) -> float:
        return s.bounds.h if row else s.bounds.w

    ordered = sorted(targets, key=lead)
    baseline = median([s.bounds.center[1] if row else s.bounds.center[0] for s in ordered])

    start = min(lead(s) for s in ordered)
    end = max(lead(s) + extent(s) for s in ordered)
    if hints.gap_px is not None:
        gap: float = hints.gap_px
    else:
        free = max(0.0, (end - start) - sum(extent(s) for s in ordered))
        gap = round_px(free / (len(ordered) - 1))

    # TODO: left/right/top/bottom still center on the baseline; apply edge
    # alignment once product settles what align means for a mixed-size row.
    if hints.align not in (None, "center", "middle"):
        logger.debug("Layout align %r accepted but shapes stay centered on the baseline", hints.align)

    moves: list[LayoutMove] = []
    cursor = start
    for s in ordered:
        cross = baseline - cross_extent(s) / 2
        if row:
            to = {"x": round_px(cursor), "y": round_px(cross)}
        else:
            to = {"x": round_px(cross), "y": round_px(cursor)}
        moves.append(LayoutMove(id=s.id, to=to))
        cursor += extent(s) + gap
    return LayoutResult(moves=moves)


def layout_hints(message: str, hints: LayoutHints | None) -> LayoutHints:
    if hints is not None:
        return hints
    parsed = parse_layout(message)
    return LayoutHints(
        axis=parsed.axis,
        distribute=parsed.distribute,
        align=parsed.align,
        gap_px=parsed.gap_px,
        target=parsed.target,
    )


# ---------------------------------------------------------------------------
# Orchestrated multi-step plan
# ---------------------------------------------------------------------------

def build_plan(req: AgentRequest) -> AgentPlan:
    """Heuristic step list for the orchestrated endpoint.

    Order: addShape, color update, move / resize / rotate, layoutDistribute.
    """
    text = req.message
    container: Size = req.viewport_size
    center = req.visible_center
    steps: list[ToolStep] = []

    create = parse_create(text)
    color = resolve_color(text)
    kind = TARGET_KIND_RULES.first(text)

    if create.has_create_intent:
        w, h = clamp_size(container.w, container.h, *default_size(create.shape))
        args: dict[str, Any] = {
            "type": "geo",
            "geo": CREATE_GEO[create.shape],
            "x": center.x - round_px(w / 2),
            "y": center.y - round_px(h / 2),
            "w": w,
            "h": h,
        }
        if color:
            args["color"] = color
        steps.append(ToolStep(tool="addShape", args=args))

    pool = selected_or_all(req.shapes, req.selection_ids)

    if pool and color and not create.has_create_intent and wants_recolor(text):
        target = pick_target(pool, kind)
        steps.append(ToolStep(tool="updateShape", args={"id": target.id, "props": {"color": color}}))

    actions = ACTION_RULES.matching(text)
    if pool and actions:
        target = pick_target(pool, kind, color)
        intent = transform_intent(text, None)
        for action in actions:
            if action == "move":
                steps.append(ToolStep(tool="moveShapes", args={
                    "moves": [{"id": target.id, "to": {"x": round_px(center.x), "y": round_px(center.y)}}],
                }))
            elif action == "resize":
                w, h = doubled_size(target, container.w, container.h)
                steps.append(ToolStep(tool="resizeShape", args={"id": target.id, "to": {"w": w, "h": h}}))
            elif action == "rotate":
                steps.append(ToolStep(tool="rotateShape", args={"id": target.id, **rotation_args(intent)}))

    layout = parse_layout(text)
    if layout.has_layout_intent:
        ids = [s.id for s in layout_targets(req.shapes, req.selection_ids, layout.target)]
        args = {"axis": layout.axis or "row", "target": layout.target, "ids": ids}
        if layout.align:
            args["align"] = layout.align
        if layout.gap_px is not None:
            args["gapPx"] = layout.gap_px
        steps.append(ToolStep(tool="layoutDistribute", args=args))

    say = None if steps else NO_INTENT_NOTE
    logger.debug("Heuristic plan: %d steps", len(steps))
    return AgentPlan(steps=steps, say=say)
