"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    ainalyzer_env: str = "development"
    ainalyzer_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Provider models
    model_openai: str = "gpt-4o"
    model_anthropic: str = "claude-3-5-sonnet-latest"
    llm_max_tokens: int = 4000
    llm_temperature: float = 0.1

    # Image payloads sent to providers
    max_image_mb: float = 20.0

    # Memoized parses kept per process
    parse_cache_size: int = 256

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
