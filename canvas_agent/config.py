"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Empty key = heuristic-only mode
    anthropic_api_key: str = ""
    canvas_agent_env: str = "development"
    canvas_agent_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Model routing
    model_cheap: str = "claude-haiku-4-5-20251001"
    model_mid: str = "claude-sonnet-4-5-20250929"

    # Model call
    llm_timeout_s: float = 20.0
    llm_max_tokens: int = 2048
    llm_temperature: float = 0.0

    # Log every stream event at INFO instead of DEBUG
    debug_events: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def llm_configured(self) -> bool:
        return bool(self.anthropic_api_key)


settings = Settings()
