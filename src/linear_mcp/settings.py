"""Configuration settings loaded from environment variables."""

from __future__ import annotations

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

from linear_mcp.governor import DEFAULT_HOURLY_QUOTA, DEFAULT_THROTTLE_THRESHOLD
from linear_mcp.linear.client import DEFAULT_API_URL


class LinearSettings(BaseSettings):
    """Linear MCP server settings.

    All settings are loaded from environment variables prefixed with LINEAR_.
    A .env file in the working directory is loaded first by load_settings().
    """

    model_config = {"env_prefix": "LINEAR_"}

    # Required
    api_key: str

    # Optional
    api_url: str = DEFAULT_API_URL
    hourly_quota: int = DEFAULT_HOURLY_QUOTA
    throttle_threshold: float = DEFAULT_THROTTLE_THRESHOLD
    batch_size: int = 5
    timeout: int = 30
    log_level: str = "INFO"
    ssl_verify: bool | str = True


def load_settings() -> LinearSettings:
    """Load .env (without overriding the real environment) and build settings."""
    load_dotenv()
    return LinearSettings()
