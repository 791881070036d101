"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from canvas_agent import __version__
from canvas_agent.config import settings
from canvas_agent.models.responses import ErrorResponse

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.canvas_agent_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Invalid request to %s: %d errors", request.url.path, len(exc.errors()))
    return JSONResponse(status_code=400, content=ErrorResponse().model_dump())


def create_app() -> FastAPI:
    app = FastAPI(
        title="Canvas Agent",
        description="Free-text canvas commands to bounds-checked edit operations",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, _invalid_request)

    from canvas_agent.api.router import api_router

    app.include_router(api_router)

    logger.info(
        "Canvas agent %s (%s): %s",
        __version__,
        settings.canvas_agent_env,
        "model augmentation on" if settings.llm_configured else "heuristics only",
    )
    return app


app = create_app()
