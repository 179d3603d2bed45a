"""Application configuration."""

import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from food_search.domain.errors import ConfigurationError

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

# Public, rate-limited key issued by api.data.gov for demonstrations.
DEMO_API_KEY = "DEMO_KEY"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    fdc_api_key: str | None = None
    fdc_fallback_api_key: str | None = DEMO_API_KEY
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    fdc_timeout_seconds: float = 15
    search_page_size: int = Field(default=25, ge=1, le=25)
    search_batch_size: int = 5
    search_max_pages: int = 20
    search_retry_attempts: int = 0
    search_retry_delay_seconds: float = 0.3
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("fdc_api_key", "fdc_fallback_api_key")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()


def resolve_api_key(settings: Settings) -> str:
    """Return the configured FDC key, falling back to the demo key."""
    key = settings.fdc_api_key or settings.fdc_fallback_api_key
    if not key:
        raise ConfigurationError(
            "FDC API key is required. Set FDC_API_KEY in the environment."
        )
    return key
