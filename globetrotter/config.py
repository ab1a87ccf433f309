"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GLOBETROTTER_",
        extra="ignore",
    )

    # Durable key-value store
    store_url: str = "sqlite:///globetrotter.db"

    # Content service
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o-mini"
    openai_itinerary_model: str = "gpt-4o"
    content_timeout_seconds: float = Field(default=30.0, gt=0)

    # Defaults
    default_currency_code: str = "INR"
    id_length: int = Field(default=9, ge=6)

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
