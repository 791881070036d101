"""Output contracts: acceptors that validate and normalize parsed model output."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from canvas_agent.engine.geometry import clamp_range, clamp_size, round_px
from canvas_agent.engine.validation import unknown_references
from canvas_agent.llm.augment import UnknownReferenceError
from canvas_agent.models.canvas import Viewport
from canvas_agent.models.responses import LayoutResult, Placement, ResizeBlock, TransformResult
from canvas_agent.models.tool_steps import AgentPlan

# Model-placed shapes are kept at least this large.
MIN_PLACEMENT_SIZE = 24.0


def _require_known(ids: Iterable[str], known: set[str]) -> None:
    unknown = sorted(set(ids) - known)
    if unknown:
        raise UnknownReferenceError(f"unknown shape ids: {', '.join(unknown[:5])}")


def accept_plan(known_ids: Iterable[str]) -> Callable[[Any], AgentPlan]:
    """Envelope check for the orchestrated endpoint.

    Step arguments are validated later, one step at a time.
    """
    known = set(known_ids)

    def accept(data: Any) -> AgentPlan:
        plan = AgentPlan.model_validate(data)
        unknown = unknown_references(plan.steps, known)
        if unknown:
            raise UnknownReferenceError(f"unknown shape ids: {', '.join(sorted(unknown)[:5])}")
        return plan

    return accept


def accept_transform(known_ids: Iterable[str], viewport: Viewport) -> Callable[[Any], TransformResult]:
    known = set(known_ids)

    def accept(data: Any) -> TransformResult:
        result = TransformResult.model_validate(data)
        _require_known([result.shape_id], known)
        block = getattr(result, result.action)
        if block is None:
            raise ValueError(f"missing {result.action!r} block")
        if result.resize is not None and result.resize.to is not None:
            w, h = clamp_size(viewport.w, viewport.h, result.resize.to.w, result.resize.to.h)
            result = result.model_copy(update={"resize": ResizeBlock(to={"w": w, "h": h}, by=result.resize.by)})
        return result

    return accept


def accept_layout(known_ids: Iterable[str]) -> Callable[[Any], LayoutResult]:
    known = set(known_ids)

    def accept(data: Any) -> LayoutResult:
        result = LayoutResult.model_validate(data)
        _require_known((m.id for m in result.moves), known)
        return result

    return accept


def accept_placement(viewport: Viewport) -> Callable[[Any], Placement]:
    """Clamp a model placement into the viewport, minimum size 24."""

    def accept(data: Any) -> Placement:
        raw = Placement.model_validate(data)
        w, h = clamp_size(viewport.w, viewport.h, raw.w, raw.h, min_size=MIN_PLACEMENT_SIZE)
        x = clamp_range(raw.x, viewport.x, viewport.x + viewport.w - w)
        y = clamp_range(raw.y, viewport.y, viewport.y + viewport.h - h)
        return Placement(x=round_px(x), y=round_px(y), w=round_px(w), h=round_px(h))

    return accept
