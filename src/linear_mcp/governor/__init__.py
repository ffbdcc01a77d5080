from linear_mcp.governor.governor import (
    DEFAULT_HOURLY_QUOTA,
    DEFAULT_THROTTLE_THRESHOLD,
    WINDOW_SECONDS,
    PendingOperation,
    RequestGovernor,
)
from linear_mcp.governor.metrics import GovernorMetrics

__all__ = [
    "DEFAULT_HOURLY_QUOTA",
    "DEFAULT_THROTTLE_THRESHOLD",
    "WINDOW_SECONDS",
    "GovernorMetrics",
    "PendingOperation",
    "RequestGovernor",
]
