"""Intent hint models: partial structured extractions from command text.

Absent fields mean "no constraint". They are never defaulted downstream.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Color = Literal[
    "black", "grey", "red", "orange", "yellow", "green",
    "teal", "blue", "indigo", "violet", "pink", "white",
]
CreateShape = Literal["rectangle", "ellipse", "triangle", "diamond", "circle"]
TargetKind = Literal["rectangle", "circle", "ellipse", "triangle", "diamond", "text", "line"]
TransformAction = Literal["move", "resize", "rotate"]
LayoutAxis = Literal["row", "column"]
LayoutAlign = Literal["left", "center", "right", "top", "middle", "bottom"]
LayoutTarget = Literal["selection", "viewport"]
AngleUnit = Literal["deg", "rad"]


class _Hint(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class CreateHint(_Hint):
    has_create_intent: bool
    shape: CreateShape = "rectangle"
    color: Color = "black"


class TransformHint(_Hint):
    has_transform_intent: bool
    action: TransformAction | None = None
    shape_hint: TargetKind | None = None
    color_hint: Color | None = None
    angle: float | None = None
    angle_mode: Literal["by", "to"] | None = None
    angle_unit: AngleUnit | None = None


class LayoutHint(_Hint):
    has_layout_intent: bool
    axis: LayoutAxis | None = None
    distribute: Literal["even"] | None = None
    align: LayoutAlign | None = None
    gap_px: int | None = Field(default=None, gt=0, le=2000)
    target: LayoutTarget | None = None
