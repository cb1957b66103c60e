from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # API Keys
    openai_api_key: str = ""
    anthropic_api_key: str = ""  # Optional, only used when TEXT_PROVIDER=anthropic
    assemblyai_api_key: str = ""  # Optional, only used when SPEECH_PROVIDER=assemblyai

    # Providers
    text_provider: str = "openai"
    speech_provider: str = "openai"

    # Models
    text_model: str = Field(
        default="gpt-4o-mini",
        validation_alias=AliasChoices("text_model", "openai_model"),
    )
    anthropic_model: str = "claude-sonnet-4-20250514"
    speech_model: str = Field(
        default="whisper-1",
        validation_alias=AliasChoices("speech_model", "openai_transcribe_model"),
    )
    assemblyai_speech_model: str = "universal-3-pro"

    # App config
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8501"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


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
