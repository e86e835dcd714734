"""
Application configuration loaded from environment variables.

All configuration is validated at startup to fail fast on misconfiguration.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with validation.

    Settings are read from environment variables prefixed with ``SPEND_LENS_``
    (e.g. ``SPEND_LENS_DEBUG=1``). Use .env file for local development.
    """

    model_config = SettingsConfigDict(
        env_prefix="spend_lens_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    env: Literal["development", "production", "testing"] = Field(
        default="development",
        description="Deployment environment name"
    )

    # Tax authority verification endpoint
    verification_url: str = Field(
        default="https://mapr.tax.gov.me/ic/api/verifyInvoice",
        description="Endpoint receiving the multipart invoice verification request"
    )
    verification_timeout: float = Field(
        default=60.0,
        gt=0.0,
        description="Overall timeout for the verification request (seconds)"
    )

    # Server
    debug: bool = Field(
        default=False,
        description="Enable debug mode with detailed error messages"
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once at startup and cached for subsequent calls.
    """
    return Settings()
