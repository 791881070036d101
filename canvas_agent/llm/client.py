"""LangChain ChatAnthropic wrapper: one JSON-producing call per request."""

from __future__ import annotations

import asyncio
import logging

from canvas_agent.config import Settings
from canvas_agent.llm.model_router import get_model_for_task

logger = logging.getLogger(__name__)


def _content_text(content) -> str:
    """Flatten a message's content (str or list of content blocks) to text."""
    if isinstance(content, str):
        return content
    parts: list[str] = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


async def complete_json(settings: Settings, task: str, system: str, user: str) -> str:
    """Ask the model for a single JSON object. Raises on failure or timeout; never retries."""
    from langchain_anthropic import ChatAnthropic
    from langchain_core.messages import HumanMessage, SystemMessage

    model_id = get_model_for_task(task, settings)
    llm = ChatAnthropic(
        model=model_id,
        api_key=settings.anthropic_api_key,
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
        max_retries=0,
    )

    messages = [SystemMessage(content=system), HumanMessage(content=user)]
    logger.debug("LLM %s call: model=%s payload=%d chars", task, model_id, len(user))

    response = await asyncio.wait_for(llm.ainvoke(messages), timeout=settings.llm_timeout_s)
    return _content_text(response.content)
