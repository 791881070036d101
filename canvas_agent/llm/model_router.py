"""Task → model selection. Mid tier for multi-step plans, cheap for single-answer endpoints."""

from __future__ import annotations

from canvas_agent.config import Settings

_TASK_MODEL_MAP = {
    "agent": "mid",
    "transform": "cheap",
    "layout": "cheap",
    "create": "cheap",
}


def get_model_for_task(task: str, settings: Settings) -> str:
    tier = _TASK_MODEL_MAP.get(task, "cheap")
    if tier == "mid":
        return settings.model_mid
    return settings.model_cheap
