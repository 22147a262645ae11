from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # Generation service (Ollama-compatible /api/generate)
    ollama_base_url: str = "http://localhost:11434"
    request_timeout: float | None = None  # None = wait indefinitely

    # Models
    summary_model: str = "phi4"
    analysis_model: str = "phi4"
    structuring_model: str = "llama3.3"

    # Sampling
    summary_temperature: float = 0.7
    summary_max_tokens: int = 1024
    analysis_temperature: float = 0.7
    analysis_max_tokens: int = 512
    structuring_temperature: float = 0.1
    structuring_max_tokens: int = 1024

    # Orchestration
    chapter_concurrency: int = Field(default=1, ge=1)

    # App config
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
