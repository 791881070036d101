"""Deterministic command resolution and tool-step validation."""

from canvas_agent.engine.heuristics import build_plan, resolve_layout, resolve_transform
from canvas_agent.engine.validation import validate_step, validate_steps

__all__ = [
    "build_plan",
    "resolve_layout",
    "resolve_transform",
    "validate_step",
    "validate_steps",
]
