"""
Shared configuration management for the Content Access Layer.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_API_URL = "https://api-v3.wurd.io"


class ContentSettings(BaseSettings):
    """Settings for the content client, read from ``CONTENT_*`` env vars."""

    model_config = SettingsConfigDict(
        env_prefix="CONTENT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Content API
    api_url: str = Field(default=DEFAULT_API_URL)
    # None keeps the transport's default timeout
    request_timeout: Optional[float] = Field(default=None, gt=0)

    # In-process cache
    cache_max_entries: int = Field(default=100, ge=1)
    cache_ttl_seconds: float = Field(default=60, gt=0)


def get_settings(**overrides) -> ContentSettings:
    """Build settings from the environment, applying explicit overrides."""
    return ContentSettings(**overrides)
