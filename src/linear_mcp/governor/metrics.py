"""Metrics snapshot returned by the request governor."""

from __future__ import annotations

from pydantic import BaseModel


class GovernorMetrics(BaseModel):
    total_requests: int = 0
    requests_in_last_hour: int = 0
    average_request_time: float = 0.0
    """Mean duration of calls in the trailing hour, in milliseconds."""
    queue_length: int = 0
    last_request_time: float = 0.0
    """Epoch seconds of the most recent call start."""

    model_config = {"frozen": True}
