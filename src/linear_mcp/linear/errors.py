"""Linear API exception hierarchy."""

from __future__ import annotations

from typing import Any


class LinearAPIError(Exception):
    """Base exception for Linear API errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: list[dict[str, Any]] | None = None,
    ):
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(message)


class LinearAuthenticationError(LinearAPIError):
    """Raised when authentication fails (401)."""

    def __init__(self, message: str = "Authentication failed. Check LINEAR_API_KEY."):
        super().__init__(message, status_code=401)


class LinearPermissionError(LinearAPIError):
    """Raised when the API key lacks access to a resource (403)."""

    def __init__(self, message: str = "Permission denied."):
        super().__init__(message, status_code=403)


class LinearNotFoundError(LinearAPIError):
    """Raised when an entity does not exist (404 or a null query result)."""

    def __init__(self, message: str = "Resource not found."):
        super().__init__(message, status_code=404)


class LinearValidationError(LinearAPIError):
    """Raised when request arguments are rejected (400)."""

    def __init__(self, message: str = "Validation error."):
        super().__init__(message, status_code=400)


class LinearRateLimitError(LinearAPIError):
    """Raised when Linear reports the API key is rate limited (429)."""

    def __init__(self, message: str = "Rate limit exceeded."):
        super().__init__(message, status_code=429)
