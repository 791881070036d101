"""API request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from canvas_agent.models.canvas import LayoutShape, NonEmptyStr, Point, Shape, Size, Viewport
from canvas_agent.models.hints import (
    CreateShape,
    LayoutAlign,
    LayoutAxis,
    LayoutTarget,
    TransformAction,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateRequest(_CamelModel):
    message: NonEmptyStr = Field(..., description="User command text")
    viewport: Viewport
    shape_hint: CreateShape | None = Field(default=None, description="Parsed shape kind, if the client parsed one")


class TransformHints(BaseModel):
    action: TransformAction | None = None
    shape: str | None = None
    color: str | None = None


class TransformRequest(_CamelModel):
    message: NonEmptyStr
    viewport: Viewport
    hints: TransformHints | None = None
    shapes: list[Shape] = Field(..., min_length=1)


class LayoutHints(_CamelModel):
    axis: LayoutAxis | None = None
    distribute: Literal["even"] | None = None
    align: LayoutAlign | None = None
    gap_px: int | None = Field(default=None, gt=0, le=2000)
    target: LayoutTarget | None = None


class LayoutRequest(_CamelModel):
    message: NonEmptyStr
    viewport: Viewport
    hints: LayoutHints | None = None
    shapes: list[LayoutShape]
    selection_ids: list[str] | None = None


class AgentRequest(_CamelModel):
    message: NonEmptyStr = Field(..., description="User command text")
    viewport_size: Size
    visible_center: Point
    shapes: list[Shape] = Field(default_factory=list)
    selection_ids: list[str] = Field(default_factory=list)

