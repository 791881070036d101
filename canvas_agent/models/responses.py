"""API response models.

The transform, layout and create shapes double as the strict output contract
handed to the language model for the matching endpoint.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from canvas_agent.models.canvas import Finite, NonEmptyStr, Point, PositiveFinite, Size
from canvas_agent.models.hints import AngleUnit, TransformAction
from canvas_agent.models.tool_steps import Offset, SizeDelta


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    llm_configured: bool = False


class ErrorResponse(BaseModel):
    error: str = "Invalid request"


class Placement(BaseModel):
    x: Finite
    y: Finite
    w: PositiveFinite
    h: PositiveFinite


class MoveBlock(BaseModel):
    to: Point | None = None
    by: Offset | None = None


class ResizeBlock(BaseModel):
    to: Size | None = None
    by: SizeDelta | None = None


class RotateBlock(BaseModel):
    to: Finite | None = None
    by: Finite | None = None
    unit: AngleUnit | None = None


class TransformResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    action: TransformAction
    shape_id: NonEmptyStr
    move: MoveBlock | None = None
    resize: ResizeBlock | None = None
    rotate: RotateBlock | None = None


class LayoutMove(BaseModel):
    id: str
    to: Point


class LayoutResult(BaseModel):
    moves: list[LayoutMove] = Field(default_factory=list)


class PlanResponse(BaseModel):
    steps: list[dict[str, Any]] = Field(default_factory=list)
    say: str | None = None
