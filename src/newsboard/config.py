"""Configuration loading for newsboard."""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from newsboard.utils.secrets import read_secret

NEWSAPI_KEY_SECRET = "newsapi-key"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="NEWSBOARD_")

    # News API settings
    api_base_url: str = Field(
        default="https://newsapi.org/v2", description="Base URL of the news REST API"
    )
    api_key: str | None = Field(
        default=None, description="News API key; read from Secret Manager when unset"
    )
    page_size: int = Field(default=20, ge=1, le=100, description="Articles per page")
    request_timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")

    # GCP settings
    gcp_project_id: str | None = Field(
        default=None, description="Google Cloud project holding the API key secret"
    )

    # Application settings
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Validate the API base URL and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                f"NEWSBOARD_API_BASE_URL '{v}' must start with http:// or https://."
            )
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the log level names a standard logging level."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"NEWSBOARD_LOG_LEVEL '{v}' is not a valid logging level.")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


@lru_cache(maxsize=4)
def _secret_api_key(project_id: str) -> str:
    return read_secret(project_id, NEWSAPI_KEY_SECRET)


def get_api_key(settings: Settings | None = None) -> str:
    """Resolve the news API key from settings, falling back to Secret Manager.

    Raises:
        ValueError: If neither an API key nor a GCP project is configured.
    """
    settings = settings or get_settings()
    if settings.api_key:
        return settings.api_key
    if not settings.gcp_project_id:
        raise ValueError(
            "NEWSBOARD_GCP_PROJECT_ID is required when NEWSBOARD_API_KEY is not set."
        )
    return _secret_api_key(settings.gcp_project_id)
