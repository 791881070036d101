"""Tool-step models: the closed vocabulary of canvas edit operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from canvas_agent.models.canvas import Finite, NonEmptyStr, Point, PositiveFinite, Size
from canvas_agent.models.hints import AngleUnit, LayoutAlign, LayoutAxis, LayoutTarget

ToolName = Literal[
    "addShape",
    "updateShape",
    "moveShapes",
    "resizeShape",
    "rotateShape",
    "layoutDistribute",
    "deleteShapes",
]


class ToolArgs(BaseModel):
    """Base for tool arguments. Unknown keys are dropped, keys are camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class AddShapeArgs(ToolArgs):
    id_hint: str | None = None  # lets later steps in the same plan refer to this shape
    type: NonEmptyStr
    geo: str | None = None
    x: Finite
    y: Finite
    w: PositiveFinite
    h: PositiveFinite
    color: str | None = None
    text: str | None = None


class ShapeProps(ToolArgs):
    w: PositiveFinite | None = None
    h: PositiveFinite | None = None
    color: str | None = None
    text: str | None = None


class UpdateShapeArgs(ToolArgs):
    id: NonEmptyStr
    x: Finite | None = None
    y: Finite | None = None
    props: ShapeProps | None = None
    rotation: Finite | None = None


class Offset(BaseModel):
    dx: Finite
    dy: Finite


class ShapeMove(ToolArgs):
    id: NonEmptyStr
    to: Point | None = None
    by: Offset | None = None


class MoveShapesArgs(ToolArgs):
    moves: list[ShapeMove]


class SizeDelta(BaseModel):
    dw: Finite
    dh: Finite


class ResizeShapeArgs(ToolArgs):
    id: NonEmptyStr
    to: Size | None = None
    by: SizeDelta | None = None


class RotateShapeArgs(ToolArgs):
    id: NonEmptyStr
    to: Finite | None = None
    by: Finite | None = None
    unit: AngleUnit = "deg"


class LayoutDistributeArgs(ToolArgs):
    ids: list[str] | None = None
    axis: LayoutAxis = "row"
    align: LayoutAlign | None = None
    gap_px: int | None = Field(default=None, ge=0, le=2000)
    target: LayoutTarget | None = None


class DeleteShapesArgs(ToolArgs):
    ids: list[NonEmptyStr]


TOOL_ARGS: dict[str, type[ToolArgs]] = {
    "addShape": AddShapeArgs,
    "updateShape": UpdateShapeArgs,
    "moveShapes": MoveShapesArgs,
    "resizeShape": ResizeShapeArgs,
    "rotateShape": RotateShapeArgs,
    "layoutDistribute": LayoutDistributeArgs,
    "deleteShapes": DeleteShapesArgs,
}


class ToolStep(BaseModel):
    """One candidate step, arguments not yet validated."""

    tool: ToolName
    args: Any = None


class AgentPlan(BaseModel):
    """Ordered candidate steps plus an optional advisory remark."""

    steps: list[ToolStep] = Field(default_factory=list)
    say: str | None = None


@dataclass(frozen=True)
class ValidatedStep:
    """A step whose arguments passed clamping and schema validation."""

    tool: str
    args: ToolArgs

    def to_wire(self) -> dict[str, Any]:
        return {"tool": self.tool, "args": self.args.to_wire()}
