"""Relay configuration with environment variable loading.

Pydantic-based configuration for the Moonshot (Kimi) provider client.
Built once at process start and passed explicitly to the client.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://api.moonshot.cn/v1"
DEFAULT_MODEL = "kimi-latest"

# Provider limit for a single uploaded file
MAX_UPLOAD_BYTES = 100 * 1024 * 1024  # 100MB


def _optional_float(name: str) -> float | None:
    value = os.getenv(name)
    return float(value) if value else None


class RelayConfig(BaseModel):
    """Configuration for the Kimi relay endpoints.

    Attributes:
        api_key: Moonshot API key sent as a bearer token.
        base_url: Provider API base URL.
        model_name: Model identifier for completions.
        temperature: Sampling temperature for every completion.
        file_purpose: Purpose tag sent with file uploads.
        max_upload_bytes: Largest file the file relay forwards.
        timeout: Provider request timeout in seconds (None waits forever).
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("MOONSHOT_API_KEY", ""),
        description="API key for the Moonshot provider",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("MOONSHOT_BASE_URL", DEFAULT_BASE_URL),
        description="Provider API base URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("KIMI_MODEL", DEFAULT_MODEL),
        description="Model to use",
    )
    temperature: float = Field(
        default=0.1,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for completions",
    )
    file_purpose: str = Field(
        default="file-extract",
        description="Purpose tag for uploaded files",
    )
    max_upload_bytes: int = Field(
        default_factory=lambda: int(os.getenv("MAX_UPLOAD_BYTES", str(MAX_UPLOAD_BYTES))),
        ge=1,
        description="Maximum accepted upload size in bytes",
    )
    timeout: float | None = Field(
        default_factory=lambda: _optional_float("PROVIDER_TIMEOUT"),
        description="Provider request timeout in seconds",
    )

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        """Strip surrounding whitespace from the API key."""
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URL so endpoint paths can be appended."""
        return v.rstrip("/")

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


def get_relay_config() -> RelayConfig:
    """Create relay configuration from environment.

    Returns:
        Configured RelayConfig instance.
    """
    return RelayConfig()
