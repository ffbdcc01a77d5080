"""Read-only resources: issues, teams, users, viewer, and organization."""

from __future__ import annotations

from typing import Any

from linear_mcp.lifespan import get_linear_client
from linear_mcp.linear.models import GetUserIssuesArgs
from linear_mcp.server import mcp


@mcp.resource("linear://issues", name="Recent Issues", mime_type="application/json")
async def recent_issues() -> dict[str, Any]:
    """The ten most recently updated issues, each with its status, assignee and team."""
    client = get_linear_client()
    return client.with_metrics({"issues": await client.list_issues()})


@mcp.resource("linear://issue/{issue_id}", name="Linear Issue", mime_type="application/json")
async def issue(issue_id: str) -> dict[str, Any]:
    """A Linear issue with its status, assignee, team and description."""
    client = get_linear_client()
    return client.with_metrics(await client.get_issue(issue_id))


@mcp.resource("linear://viewer", name="Current User", mime_type="application/json")
async def viewer() -> dict[str, Any]:
    """The authenticated user, their teams, and their organization."""
    client = get_linear_client()
    return client.with_metrics(await client.get_viewer())


@mcp.resource("linear://organization", name="Current Organization", mime_type="application/json")
async def organization() -> dict[str, Any]:
    """The organization for the API key, with its teams and members."""
    client = get_linear_client()
    return client.with_metrics(await client.get_organization())


@mcp.resource("linear://team/{team_id}/issues", name="Team Issues", mime_type="application/json")
async def team_issues(team_id: str) -> dict[str, Any]:
    """Issues belonging to a team, with status and assignee."""
    client = get_linear_client()
    return client.with_metrics({"issues": await client.get_team_issues(team_id)})


@mcp.resource(
    "linear://user/{user_id}/assigned", name="User Assigned Issues", mime_type="application/json"
)
async def user_assigned_issues(user_id: str) -> dict[str, Any]:
    """Issues assigned to a user, most recently updated first. Use ``me`` for the authenticated user."""
    client = get_linear_client()
    args = GetUserIssuesArgs(user_id=None if user_id == "me" else user_id)
    return client.with_metrics({"issues": await client.get_user_issues(args)})
