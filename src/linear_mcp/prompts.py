"""Server prompt describing how to use the Linear tools."""

from linear_mcp.server import mcp

SERVER_PROMPT = """\
This server provides access to Linear, a project management tool. Use it to
manage issues, track work, and coordinate with teams.

Tool usage:
- linear_create_issue: take team_id from the linear://organization resource.
  Priority levels are 1=urgent, 2=high, 3=normal, 4=low. label_ids come from
  linear_get_labels.
- linear_update_issue: get issue IDs from linear_search_issues or the
  linear://issue/{issue_id} resource, and pass only the fields to change.
- linear_search_issues: combine filters for precise results. query searches
  title and description. Returns 10 results by default.
- linear_get_user_issues: omit user_id for the authenticated user's issues.
- linear_add_comment: the body is markdown.
- linear_get_api_metrics: check remaining hourly quota before large searches.

Every response includes metadata.apiMetrics with requestsInLastHour,
remainingRequests, averageRequestTime and queueLength. Requests are queued
and slowed down automatically when the hourly quota is nearly used.
"""


@mcp.prompt(name="linear_server_prompt", description="Instructions for using the Linear MCP server")
def linear_server_prompt() -> str:
    return SERVER_PROMPT
