"""Master API router: mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from canvas_agent.api import agent, create, health, layout, transform

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(create.router)
api_router.include_router(transform.router)
api_router.include_router(layout.router)
api_router.include_router(agent.router)
