"""Target selection: which shape(s) a command applies to.

First match in list order, never best score: a shape matching both the kind
and the color hint, else the kind alone, else the color alone, else the first
candidate.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypeVar

from canvas_agent.intent.aliases import KIND_SYNONYMS
from canvas_agent.models.canvas import Shape


class _HasId(Protocol):
    id: str


S = TypeVar("S", bound=_HasId)


def matches_kind(shape: Shape, kind: str) -> bool:
    kind = kind.lower()
    names = KIND_SYNONYMS.get(kind, (kind,))
    geo = (shape.geo or shape.type or "").lower()
    type_ = shape.type.lower()
    return any(name in geo or name in type_ for name in names)


def matches_color(shape: Shape, color: str) -> bool:
    return color.lower() in (shape.color or "").lower()


def pick_target(
    shapes: Sequence[Shape],
    kind: str | None = None,
    color: str | None = None,
) -> Shape | None:
    if not shapes:
        return None

    if kind or color:
        for shape in shapes:
            if (not kind or matches_kind(shape, kind)) and (not color or matches_color(shape, color)):
                return shape
        if kind:
            for shape in shapes:
                if matches_kind(shape, kind):
                    return shape
        if color:
            for shape in shapes:
                if matches_color(shape, color):
                    return shape

    return shapes[0]


def selected_or_all(shapes: Sequence[S], selection_ids: Sequence[str] | None) -> list[S]:
    """Selected shapes in snapshot order, or every shape when nothing selected matches."""
    if selection_ids:
        wanted = set(selection_ids)
        selected = [s for s in shapes if s.id in wanted]
        if selected:
            return selected
    return list(shapes)


def layout_targets(
    shapes: Sequence[S],
    selection_ids: Sequence[str] | None,
    target: str | None,
) -> list[S]:
    """Selection when the command asks for it and one exists, else all shapes."""
    if target == "selection" and selection_ids:
        wanted = set(selection_ids)
        return [s for s in shapes if s.id in wanted]
    return list(shapes)
