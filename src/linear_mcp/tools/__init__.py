"""Importing this package registers every tool with the server."""

from linear_mcp.tools import issues, projects  # noqa: F401
