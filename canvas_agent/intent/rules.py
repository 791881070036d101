"""Ordered rule sets: the prioritized pattern-matching stage of intent parsing.

Every keyword family is a RuleSet: an ordered tuple of (label, pattern) rules.
Ties are broken by declaration order, never by where a word appears in the
text and never by match length:

    AXIS = RuleSet.of("axis", [
        ("row", r"(\\brow\\b|horizontal|side by side)"),
        ("column", r"(\\bcolumn\\b|vertical|stack(ed)?)"),
    ])
    AXIS.first("stack them in a row")  # -> "row"
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

L = TypeVar("L")


@dataclass(frozen=True)
class Rule(Generic[L]):
    label: L
    pattern: re.Pattern[str]

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


class RuleSet(Generic[L]):
    """Immutable, ordered collection of rules for one keyword family."""

    def __init__(self, name: str, rules: Iterable[Rule[L]]) -> None:
        self.name = name
        self._rules: tuple[Rule[L], ...] = tuple(rules)
        if not self._rules:
            raise ValueError(f"Rule set {name!r} has no rules")

    @classmethod
    def of(
        cls,
        name: str,
        table: Iterable[tuple[L, str]],
        flags: int = re.IGNORECASE,
    ) -> RuleSet[L]:
        return cls(name, (Rule(label, re.compile(pattern, flags)) for label, pattern in table))

    def first(self, text: str) -> L | None:
        """Label of the first rule, in declaration order, that matches."""
        for rule in self._rules:
            if rule.matches(text):
                logger.debug("%s: matched %r", self.name, rule.label)
                return rule.label
        return None

    def matching(self, text: str) -> list[L]:
        """Labels of every matching rule, in declaration order, without repeats."""
        labels: list[L] = []
        for rule in self._rules:
            if rule.label not in labels and rule.matches(text):
                labels.append(rule.label)
        return labels

    def any(self, text: str) -> bool:
        return any(rule.matches(text) for rule in self._rules)
