"""
Configuration for the margin API client (base URL and timeouts).
"""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_TIMEOUT_SECONDS = 30.0

API_URL_ENV = "MARGIN_API_URL"
API_TIMEOUT_ENV = "MARGIN_API_TIMEOUT"


class APIConfig(BaseModel):
    """Configuration for the asset-configuration and margin-validation services.

    Both services share one base URL. The config is injected into clients and
    sessions at construction; nothing below the CLI reads the environment.
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Normalize the base URL so paths can be joined with a leading slash."""
        value = value.strip()
        if not value:
            raise ValueError("base_url must not be empty")
        return value.rstrip("/")

    @classmethod
    def from_env(cls, base_url: str | None = None) -> APIConfig:
        """Load configuration from environment variables.

        Optional:
            MARGIN_API_URL: Service base URL (default: http://localhost:8080)
            MARGIN_API_TIMEOUT: Request timeout in seconds (default: 30)

        An explicit `base_url` argument takes priority over `MARGIN_API_URL`.
        """
        timeout_seconds = float(os.environ.get(API_TIMEOUT_ENV, str(DEFAULT_TIMEOUT_SECONDS)))
        return cls(
            base_url=base_url or os.environ.get(API_URL_ENV) or DEFAULT_BASE_URL,
            timeout_seconds=timeout_seconds,
        )
