"""Application settings using pydantic-settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from suitedash_core.constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_CACHE_TTL_MINUTES,
    DEFAULT_PAGE_SIZE,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
)


class Settings(BaseSettings):
    """Central configuration for the SuiteDash client."""

    model_config = SettingsConfigDict(env_prefix="SD_", env_file=".env")

    # --- API ---
    public_id: SecretStr = Field(
        description="SuiteDash public ID sent as the X-Public-ID header",
    )
    secret_key: SecretStr = Field(
        description="SuiteDash secret key sent as the X-Secret-Key header",
    )
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="Base URL of the SuiteDash secure API",
    )
    request_timeout_seconds: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout applied to every API request",
    )

    # --- Cache ---
    cache_backend: Literal["disk", "redis", "memory"] = Field(
        default="disk",
        description="Durable storage backend: 'disk' (diskcache), 'redis' or 'memory'",
    )
    cache_dir: Path = Field(
        default=Path("./.cache/suitedash"),
        description="Directory for the diskcache store",
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL (cache_backend=redis)",
    )
    redis_key_prefix: str = Field(
        default="suitedash:",
        description="Namespace prepended to every Redis key",
    )
    cache_ttl_minutes: int = Field(
        default=DEFAULT_CACHE_TTL_MINUTES,
        ge=1,
        description="TTL for cached API responses in minutes",
    )

    # --- Lists ---
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        ge=1,
        description="Items requested per page by list screens",
    )

    # --- Logging ---
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer: 'console' for humans, 'json' for machines",
    )

    @model_validator(mode="after")
    def validate_api_base_url(self) -> Settings:
        """Drop trailing slashes so paths join cleanly."""
        self.api_base_url = self.api_base_url.rstrip("/")
        return self

    @model_validator(mode="after")
    def validate_cache_config(self) -> Settings:
        """Validate cache backend configuration."""
        if self.cache_backend == "redis" and not self.redis_url:
            msg = "redis_url required when cache_backend=redis"
            raise ValueError(msg)
        return self
