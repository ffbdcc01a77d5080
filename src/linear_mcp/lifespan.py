"""Server lifespan: creates the governor and LinearClient on startup, closes them on shutdown."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from linear_mcp.governor import RequestGovernor
from linear_mcp.linear.client import LinearClient
from linear_mcp.logging.logger import setup_logger
from linear_mcp.settings import LinearSettings, load_settings

_client: LinearClient | None = None
_settings: LinearSettings | None = None


def get_linear_client() -> LinearClient:
    """Return the active LinearClient. Only valid during server lifespan."""
    if _client is None:
        raise RuntimeError("LinearClient not initialized. Is the server running?")
    return _client


def get_settings() -> LinearSettings:
    """Return the loaded settings. Only valid during server lifespan."""
    if _settings is None:
        raise RuntimeError("Settings not loaded. Is the server running?")
    return _settings


@asynccontextmanager
async def lifespan(server) -> AsyncIterator[None]:  # noqa: ARG001
    """Async context manager that manages the governor and LinearClient lifecycle."""
    global _client, _settings

    _settings = load_settings()
    logger = setup_logger(level=_settings.log_level)
    logger.info(
        "Starting linear-mcp server (hourly_quota=%d, batch_size=%d)",
        _settings.hourly_quota,
        _settings.batch_size,
    )

    governor = RequestGovernor(
        hourly_quota=_settings.hourly_quota,
        throttle_threshold=_settings.throttle_threshold,
    )
    _client = LinearClient(
        api_key=_settings.api_key,
        governor=governor,
        api_url=_settings.api_url,
        timeout=_settings.timeout,
        ssl_verify=_settings.ssl_verify,
        batch_size=_settings.batch_size,
    )

    try:
        yield
    finally:
        logger.info("Shutting down linear-mcp server")
        await governor.aclose()
        await _client.close()
        _client = None
        _settings = None
