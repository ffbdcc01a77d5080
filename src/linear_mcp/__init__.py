"""Linear MCP server with a quota-aware request governor."""

from linear_mcp.governor import GovernorMetrics, RequestGovernor
from linear_mcp.linear.client import LinearClient
from linear_mcp.server import mcp
from linear_mcp.settings import LinearSettings

__all__ = ["mcp", "GovernorMetrics", "LinearClient", "LinearSettings", "RequestGovernor"]
