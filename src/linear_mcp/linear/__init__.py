from linear_mcp.linear.client import LinearClient
from linear_mcp.linear.errors import (
    LinearAPIError,
    LinearAuthenticationError,
    LinearNotFoundError,
    LinearPermissionError,
    LinearRateLimitError,
    LinearValidationError,
)
from linear_mcp.linear.filters import build_search_filter

__all__ = [
    "LinearClient",
    "LinearAPIError",
    "LinearAuthenticationError",
    "LinearNotFoundError",
    "LinearPermissionError",
    "LinearRateLimitError",
    "LinearValidationError",
    "build_search_filter",
]
