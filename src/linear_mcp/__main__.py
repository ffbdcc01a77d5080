"""Entry point for running the Linear MCP server: python -m linear_mcp"""

import linear_mcp.prompts  # noqa: F401
import linear_mcp.resources  # noqa: F401
import linear_mcp.tools  # noqa: F401
from linear_mcp.server import mcp


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
