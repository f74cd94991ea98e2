"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces
configuration values from the environment, files and programmatic overrides
into the correct types with proper defaults.
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.openai.com/v1"


class ClientSettings(BaseSettings):
    """Pydantic settings schema for the client.

    Reads ``OPENAI_*`` environment variables when instantiated without
    arguments.
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_file=None,  # .env files are loaded explicitly by the resolver
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(
        default=None,
        description="API key sent as a bearer token",
    )

    organization: str | None = Field(
        default=None,
        description="Organization sent in the OpenAI-Organization header",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Root URL of the API",
        min_length=1,
    )

    timeout_seconds: float = Field(
        default=60.0,
        description="Transport timeout per request",
        gt=0,
    )

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop trailing slashes."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {v!r}")
        return v.rstrip("/")

    @field_validator("api_key", "organization")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v

    def to_dict(self) -> dict[str, Any]:
        return {
            "api_key": self.api_key,
            "organization": self.organization,
            "base_url": self.base_url,
            "timeout_seconds": self.timeout_seconds,
        }
