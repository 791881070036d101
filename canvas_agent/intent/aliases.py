"""Alias tables: color and shape synonyms mapped to canonical values.

Process-wide constants. Lookup order is the declaration order below.
"""

from __future__ import annotations

import re

from canvas_agent.intent.rules import RuleSet
from canvas_agent.models.hints import Color, CreateShape, TargetKind

COLORS: tuple[Color, ...] = (
    "black", "grey", "red", "orange", "yellow", "green",
    "teal", "blue", "indigo", "violet", "pink", "white",
)

COLOR_ALIASES: tuple[tuple[str, Color], ...] = (
    ("black", "black"),
    ("grey", "grey"),
    ("gray", "grey"),
    ("silver", "grey"),
    ("red", "red"),
    ("orange", "orange"),
    ("yellow", "yellow"),
    ("green", "green"),
    ("teal", "teal"),
    ("cyan", "teal"),
    ("turquoise", "teal"),
    ("blue", "blue"),
    ("indigo", "indigo"),
    ("navy", "indigo"),
    ("violet", "violet"),
    ("purple", "violet"),
    ("pink", "pink"),
    ("white", "white"),
    ("ivory", "white"),
    ("off-white", "white"),
)

COLOR_RULES: RuleSet[Color] = RuleSet.of(
    "color",
    ((color, rf"\b{re.escape(alias)}\b") for alias, color in COLOR_ALIASES),
)

CREATE_SHAPE_RULES: RuleSet[CreateShape] = RuleSet.of(
    "create-shape",
    [
        ("circle", r"\b(circle|ellipse|oval)\b"),
        ("rectangle", r"\b(rectangle|rect|box|square)\b"),
        ("triangle", r"\btriangle\b"),
        ("diamond", r"\bdiamond\b"),
    ],
)

# "ellipse" can never win over "circle": both share the ellipse/oval words.
TARGET_KIND_RULES: RuleSet[TargetKind] = RuleSet.of(
    "target-kind",
    [
        ("rectangle", r"\b(rectangle|rect|box|square)\b"),
        ("circle", r"\b(circle|ellipse|oval)\b"),
        ("ellipse", r"\b(ellipse|oval)\b"),
        ("triangle", r"\btriangle\b"),
        ("diamond", r"\bdiamond\b"),
        ("text", r"\b(text|label|title|heading|word|words)\b"),
        ("line", r"\b(line|arrow|rule|stroke)\b"),
    ],
)

# Editor geo/type names a kind hint also answers to.
KIND_SYNONYMS: dict[str, tuple[str, ...]] = {
    "circle": ("circle", "ellipse"),
    "line": ("line", "arrow"),
}

# Creation geometry: "circle" is an ellipse with equal sides.
CREATE_GEO: dict[str, str] = {
    "circle": "ellipse",
    "ellipse": "ellipse",
    "rectangle": "rectangle",
    "triangle": "triangle",
    "diamond": "diamond",
}


def resolve_color(text: str, default: Color | None = None) -> Color | None:
    """First alias, in table order, found as a whole word in ``text``."""
    color = COLOR_RULES.first(text)
    return color if color is not None else default
