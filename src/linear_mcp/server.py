"""FastMCP server instance."""

from fastmcp import FastMCP

from linear_mcp.lifespan import lifespan

INSTRUCTIONS = (
    "This server provides access to Linear, a project management tool. "
    "Every response carries metadata.apiMetrics describing the hourly API quota; "
    "prefer narrow searches when remainingRequests runs low."
)

mcp = FastMCP("linear-mcp", instructions=INSTRUCTIONS, lifespan=lifespan)
