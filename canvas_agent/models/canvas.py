"""Canvas snapshot models: viewport and shapes as supplied by the editor."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field

Finite = Annotated[float, Field(allow_inf_nan=False)]
PositiveFinite = Annotated[float, Field(gt=0, allow_inf_nan=False)]
NonEmptyStr = Annotated[str, Field(min_length=1)]


class Bounds(BaseModel):
    x: Finite
    y: Finite
    w: PositiveFinite
    h: PositiveFinite

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.w / 2, self.y + self.h / 2


class Viewport(Bounds):
    """Visible page-space rectangle."""


class Size(BaseModel):
    w: PositiveFinite
    h: PositiveFinite


class Point(BaseModel):
    x: Finite
    y: Finite


class Shape(BaseModel):
    """Read-only snapshot of one editor shape."""

    id: NonEmptyStr
    type: NonEmptyStr
    geo: str | None = None
    color: str | None = None
    text: str | None = None
    rotation: Finite | None = None
    bounds: Bounds


class LayoutShape(BaseModel):
    """Minimal shape record accepted by the layout endpoint."""

    id: str
    type: str
    bounds: Bounds
