"""Streaming execution protocol: ordered, framed events over SSE.

One request yields at most one ``message`` event, then one ``tool.<name>``
event per validated step in production order, then exactly one ``done``.
Later events may target a shape created by an earlier ``addShape``, so the
consumer must apply them in the order received.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncGenerator, Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import Any

from canvas_agent.engine.validation import validate_step
from canvas_agent.models.canvas import Size
from canvas_agent.models.tool_steps import AgentPlan, ValidatedStep

logger = logging.getLogger(__name__)

FAILURE_NOTE = "(error) Agent failed to process."
_PREVIEW_CHARS = 200


@dataclass(frozen=True)
class Event:
    kind: str  # message | tool.<name> | done
    payload: dict[str, Any] | None = None

    def encode(self) -> str:
        data = json.dumps(self.payload if self.payload is not None else {})
        return f"event: {self.kind}\ndata: {data}\n\n"


def message_event(text: str) -> Event:
    return Event("message", {"text": text})


def tool_event(step: ValidatedStep) -> Event:
    return Event(f"tool.{step.tool}", step.args.to_wire())


def done_event() -> Event:
    return Event("done")


def plan_events(plan: AgentPlan, container: Size) -> Iterator[Event]:
    """Frame a plan. Steps that fail validation are skipped, not fatal."""
    if plan.say:
        yield message_event(plan.say)
    for step in plan.steps:
        validated = validate_step(step, container)
        if validated is not None:
            yield tool_event(validated)
    yield done_event()


def _log_event(event: Event, verbose: bool) -> None:
    level = logging.INFO if verbose else logging.DEBUG
    if not logger.isEnabledFor(level):
        return
    preview = json.dumps(event.payload) if event.payload is not None else ""
    if len(preview) > _PREVIEW_CHARS:
        preview = preview[:_PREVIEW_CHARS] + "…"
    logger.log(level, "-> %s %s", event.kind, preview)


async def stream_plan(
    resolve: Callable[[], Awaitable[AgentPlan]],
    container: Size,
    is_disconnected: Callable[[], Awaitable[bool]] | None = None,
    verbose: bool = False,
) -> AsyncGenerator[str, None]:
    """Resolve a plan and yield its SSE frames.

    Production stops when the consumer disconnects; nothing already sent is
    rolled back. Any failure becomes a message event followed by ``done``.
    """
    sent = 0
    try:
        plan = await resolve()
        for event in plan_events(plan, container):
            if is_disconnected is not None and await is_disconnected():
                logger.info("Consumer disconnected after %d events, stopping", sent)
                return
            _log_event(event, verbose)
            yield event.encode()
            sent += 1
        logger.info("Agent stream complete: %d events", sent)
    except Exception:
        logger.exception("Agent stream failed after %d events", sent)
        for event in (message_event(FAILURE_NOTE), done_event()):
            _log_event(event, verbose)
            yield event.encode()
