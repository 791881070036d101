"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from canvas_agent import __version__
from canvas_agent.config import Settings
from canvas_agent.dependencies import get_settings
from canvas_agent.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        llm_configured=settings.llm_configured,
    )


@router.get("/prompts")
async def prompts() -> dict[str, str]:
    from canvas_agent.llm.prompts import get_all_templates

    return get_all_templates()
