"""Augmentation: best-effort replacement of a heuristic result by model output.

try_augment() turns every failure (network, timeout, unparseable text, schema,
unknown shape ids) into a Rejected value; augment_or_fallback() is the single
place that collapses a rejection to the precomputed heuristic result. There is
no retry and no per-field merge.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from canvas_agent.config import Settings
from canvas_agent.llm import client
from canvas_agent.llm.prompts import get_prompt_template

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UnknownReferenceError(ValueError):
    """Model output points at shape ids that are not in the snapshot."""


@dataclass(frozen=True)
class Accepted(Generic[T]):
    value: T


@dataclass(frozen=True)
class Rejected:
    reason: str  # error | timeout | parse | schema | reference
    detail: str = ""


def extract_json(text: str) -> Any:
    """Parse the JSON object in model output, tolerating fences and surrounding prose."""
    cleaned = re.sub(r"^```(?:json)?\s*\n?", "", text.strip())
    cleaned = re.sub(r"\n?```\s*$", "", cleaned).strip()

    json_match = re.search(r"\{[\s\S]*\}", cleaned)
    if json_match:
        cleaned = json_match.group(0)

    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ValueError(f"not JSON: {e}") from e
    except RecursionError as e:
        raise ValueError("JSON nested too deeply") from e


async def try_augment(
    settings: Settings,
    task: str,
    payload: dict[str, Any],
    accept: Callable[[Any], T],
) -> Accepted[T] | Rejected:
    """One model round trip, validated by ``accept``.

    ``accept`` receives the parsed JSON and returns the accepted value, or
    raises ValueError (pydantic's ValidationError included) to reject it.
    """
    system = get_prompt_template(task)
    user = json.dumps(payload)

    try:
        text = await client.complete_json(settings, task, system, user)
    except asyncio.TimeoutError:
        return Rejected("timeout", f"no answer within {settings.llm_timeout_s}s")
    except Exception as e:
        return Rejected("error", f"{type(e).__name__}: {e}")

    try:
        data = extract_json(text)
    except ValueError as e:
        return Rejected("parse", str(e))

    try:
        return Accepted(accept(data))
    except ValidationError as e:
        return Rejected("schema", f"{e.error_count()} validation errors")
    except UnknownReferenceError as e:
        return Rejected("reference", str(e))
    except (ValueError, TypeError, ArithmeticError, RecursionError) as e:
        return Rejected("schema", f"{type(e).__name__}: {e}")


async def augment_or_fallback(
    settings: Settings,
    task: str,
    payload: dict[str, Any],
    accept: Callable[[Any], T],
    fallback: T,
) -> T:
    """Model result when configured and valid, otherwise ``fallback``."""
    if not settings.llm_configured:
        logger.debug("%s: no model configured, using heuristics", task)
        return fallback

    result = await try_augment(settings, task, payload, accept)
    if isinstance(result, Rejected):
        logger.warning("%s: model output rejected (%s: %s), using heuristics", task, result.reason, result.detail)
        return fallback

    logger.info("%s: using model output", task)
    return result.value
