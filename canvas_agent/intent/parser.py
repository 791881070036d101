"""Intent parser: pure functions from command text to typed hints.

Three independent detectors (create, transform, layout). Each reads only the
literal text, never shape state. When a detector finds no intent it returns
only the boolean field; every other field stays absent.
"""

from __future__ import annotations

import re

from canvas_agent.intent.aliases import (
    COLOR_RULES,
    CREATE_SHAPE_RULES,
    TARGET_KIND_RULES,
    resolve_color,
)
from canvas_agent.intent.rules import RuleSet
from canvas_agent.models.hints import (
    CreateHint,
    LayoutAlign,
    LayoutAxis,
    LayoutHint,
    TransformAction,
    TransformHint,
)

CREATE_INTENT = RuleSet.of("create-intent", [("create", r"\b(create|add|make)\b")])

# Priority: move > resize > rotate.
ACTION_RULES: RuleSet[TransformAction] = RuleSet.of(
    "transform-action",
    [
        ("move", r"\b(move|translate|drag|position|center)\b"),
        ("resize", r"\b(resize|scale|grow|shrink|double size|twice as big)\b"),
        ("rotate", r"\b(rotate|turn|spin)\b"),
    ],
)

RECOLOR_INTENT = RuleSet.of("recolor-intent", [("recolor", r"\b(colou?r|recolou?r|paint|fill)\b")])

LAYOUT_INTENT = RuleSet.of(
    "layout-intent",
    [("layout", r"(arrange|layout|space|distribute|row|column|horizontal|vertical|stack)")],
)

# Row keywords are checked before column keywords.
AXIS_RULES: RuleSet[LayoutAxis] = RuleSet.of(
    "layout-axis",
    [
        ("row", r"(\brow\b|horizontal|side by side)"),
        ("column", r"(\bcolumn\b|vertical|stack(ed)?)"),
    ],
)

DISTRIBUTE_RULES = RuleSet.of(
    "layout-distribute",
    [
        (
            "even",
            r"(space(\s+them|\s+these|\s+the)?\s+even(ly)?"
            r"|distribute(\s+even(ly)?)?"
            r"|equal(ly)?\s+spac(ed|ing)?)",
        )
    ],
)

# center and middle share one word set, so when either word appears the key
# declared first ("center") is returned.
ALIGN_RULES: RuleSet[LayoutAlign] = RuleSet.of(
    "layout-align",
    [
        ("left", r"\bleft\b"),
        ("center", r"\b(center|centre|middle)\b"),
        ("right", r"\bright\b"),
        ("top", r"\btop\b"),
        ("middle", r"\b(middle|center|centre)\b"),
        ("bottom", r"\bbottom\b"),
    ],
)

TARGET_SELECTION = RuleSet.of("layout-target", [("selection", r"(these|selected|selection)")])

_GAP_RE = re.compile(r"(gap|spacing|space)\s*(of|=)?\s*(\d{1,4})", re.IGNORECASE)
_ANGLE_RE = re.compile(
    r"(\bto\s+)?(-?\d+(?:\.\d+)?)\s*(°|degrees?\b|deg\b|radians?\b|rad\b)",
    re.IGNORECASE,
)

MAX_GAP_PX = 2000


def parse_create(text: str) -> CreateHint:
    """Detect a create command. Shape and color fall back to rectangle and black."""
    has_intent = CREATE_INTENT.any(text)
    shape = CREATE_SHAPE_RULES.first(text) or "rectangle"
    color = resolve_color(text, default="black")
    return CreateHint(has_create_intent=has_intent, shape=shape, color=color)


def parse_transform(text: str) -> TransformHint:
    actions = ACTION_RULES.matching(text)
    if not actions:
        return TransformHint(has_transform_intent=False)

    fields: dict = {
        "action": actions[0],
        "shape_hint": TARGET_KIND_RULES.first(text),
        "color_hint": COLOR_RULES.first(text),
    }
    fields.update(parse_angle(text))
    return TransformHint(has_transform_intent=True, **fields)


def parse_angle(text: str) -> dict:
    """Explicit rotation angle, if one is written with a unit.

    Returns ``{}`` or ``{"angle", "angle_mode", "angle_unit"}``. "to <n>" makes
    the angle absolute; radians are only used when spelled out.
    """
    m = _ANGLE_RE.search(text)
    if m is None:
        return {}
    unit = "rad" if m.group(3).lower().startswith("rad") else "deg"
    return {
        "angle": float(m.group(2)),
        "angle_mode": "to" if m.group(1) else "by",
        "angle_unit": unit,
    }


def parse_gap(text: str) -> int | None:
    """First 1-4 digit number after gap/spacing/space, if within (0, 2000]."""
    m = _GAP_RE.search(text)
    if m is None:
        return None
    value = int(m.group(3))
    if value <= 0 or value > MAX_GAP_PX:
        return None
    return value


def parse_layout(text: str) -> LayoutHint:
    if not LAYOUT_INTENT.any(text):
        return LayoutHint(has_layout_intent=False)

    return LayoutHint(
        has_layout_intent=True,
        axis=AXIS_RULES.first(text),
        distribute=DISTRIBUTE_RULES.first(text),
        align=ALIGN_RULES.first(text),
        gap_px=parse_gap(text),
        target=TARGET_SELECTION.first(text) or "viewport",
    )


def wants_recolor(text: str) -> bool:
    return RECOLOR_INTENT.any(text)
