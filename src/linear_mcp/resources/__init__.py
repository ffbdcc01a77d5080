"""Importing this package registers every resource with the server."""

from linear_mcp.resources import linear  # noqa: F401
