"""Tool-step validation: clamp, then schema-check each step on its own.

A malformed step is dropped and logged; its siblings still go through.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from canvas_agent.engine.geometry import clamp_size
from canvas_agent.models.canvas import Size
from canvas_agent.models.tool_steps import TOOL_ARGS, ToolStep, ValidatedStep

logger = logging.getLogger(__name__)

# Stand-in for a missing w/h on a size-bearing step before clamping.
_FALLBACK_SIZE = 100.0


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_float(value: Any) -> float | None:
    if not _is_number(value):
        return None
    try:
        return float(value)
    except OverflowError:
        return None


def _clamped_dims(container: Size, dims: dict[str, Any]) -> dict[str, Any]:
    w = _as_float(dims.get("w", _FALLBACK_SIZE))
    h = _as_float(dims.get("h", _FALLBACK_SIZE))
    if w is None or h is None:
        # Leave it for the schema to reject.
        return {}
    cw, ch = clamp_size(container.w, container.h, w, h)
    return {"w": cw, "h": ch}


def clamp_step_args(tool: str, args: Any, container: Size) -> Any:
    """Return a copy of ``args`` with sizes forced into [8, container]."""
    if not isinstance(args, dict):
        return args

    if tool == "addShape":
        return {**args, **_clamped_dims(container, args)}

    if tool == "resizeShape" and isinstance(args.get("to"), dict):
        to = args["to"]
        return {**args, "to": {**to, **_clamped_dims(container, to)}}

    return args


def validate_step(step: ToolStep, container: Size) -> ValidatedStep | None:
    model = TOOL_ARGS.get(step.tool)
    if model is None:
        logger.warning("Dropping step with unknown tool %r", step.tool)
        return None

    try:
        args = clamp_step_args(step.tool, step.args, container)
    except (ArithmeticError, TypeError, ValueError) as e:
        logger.warning("Dropping %s step: size clamp failed (%s)", step.tool, e)
        return None

    try:
        validated = model.model_validate(args)
    except ValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(part) for part in first.get("loc", ()))
        logger.warning("Dropping %s step: %s (%s)", step.tool, first.get("msg"), loc or "args")
        return None
    except (ArithmeticError, TypeError) as e:
        logger.warning("Dropping %s step: %s", step.tool, e)
        return None
    return ValidatedStep(tool=step.tool, args=validated)


def validate_steps(steps: Iterable[ToolStep], container: Size) -> list[ValidatedStep]:
    out: list[ValidatedStep] = []
    for step in steps:
        validated = validate_step(step, container)
        if validated is not None:
            out.append(validated)
    return out


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def referenced_ids(step: ToolStep) -> set[str]:
    """Shape ids a raw step points at (ids it creates are not included)."""
    args = step.args if isinstance(step.args, dict) else {}
    ids: set[str] = set()

    def _add(value: Any) -> None:
        if isinstance(value, str):
            ids.add(value)

    if step.tool in ("updateShape", "resizeShape", "rotateShape"):
        _add(args.get("id"))
    elif step.tool == "moveShapes":
        for move in _as_list(args.get("moves")):
            if isinstance(move, dict):
                _add(move.get("id"))
    elif step.tool in ("layoutDistribute", "deleteShapes"):
        for value in _as_list(args.get("ids")):
            _add(value)
    return ids


def unknown_references(steps: Iterable[ToolStep], known_ids: Iterable[str]) -> set[str]:
    """Ids that are neither in the snapshot nor created by an earlier addShape."""
    known = set(known_ids)
    unknown: set[str] = set()
    for step in steps:
        unknown |= referenced_ids(step) - known
        if step.tool == "addShape" and isinstance(step.args, dict):
            hint = step.args.get("idHint")
            if isinstance(hint, str) and hint:
                known.add(hint)
    return unknown
