"""Issue tools: create, update, search, assigned issues, and comments."""

from __future__ import annotations

from typing import Any

from linear_mcp.lifespan import get_linear_client
from linear_mcp.linear.models import (
    AddCommentArgs,
    CreateIssueArgs,
    GetUserIssuesArgs,
    SearchIssuesArgs,
    UpdateIssueArgs,
)
from linear_mcp.server import mcp
from linear_mcp.tools.common import format_issue_list


@mcp.tool(name="linear_create_issue")
async def create_issue(
    title: str,
    team_id: str,
    description: str | None = None,
    priority: int | None = None,
    status: str | None = None,
    estimate: int | None = None,
    label_ids: list[str] | None = None,
) -> dict[str, Any]:
    """Create a new Linear issue.

    Args:
        title: Issue title.
        team_id: ID of the team that owns the issue (see the linear://organization resource).
        description: Markdown description. Optional.
        priority: 0 = none, 1 = urgent, 2 = high, 3 = normal, 4 = low. Optional.
        status: Workflow state ID. Optional.
        estimate: Estimate points. Optional.
        label_ids: Label IDs to attach (see linear_get_labels). Optional.

    Returns:
        Summary text, the created issue, and API metrics.
    """
    client = get_linear_client()
    args = CreateIssueArgs(
        title=title,
        team_id=team_id,
        description=description,
        priority=priority,
        status=status,
        estimate=estimate,
        label_ids=label_ids,
    )
    issue = await client.create_issue(args)
    return client.with_metrics({
        "text": f"Created issue {issue['identifier']}: {issue['title']}\nURL: {issue['url']}",
        "issue": issue,
    })


@mcp.tool(name="linear_update_issue")
async def update_issue(
    id: str,  # noqa: A002
    title: str | None = None,
    description: str | None = None,
    priority: int | None = None,
    status: str | None = None,
) -> dict[str, Any]:
    """Update an existing Linear issue. Only the fields passed are changed.

    Args:
        id: Issue ID.
        title: New title. Optional.
        description: New markdown description. Optional.
        priority: New priority (0-4). Optional.
        status: New workflow state ID. Optional.

    Returns:
        Summary text, the updated issue, and API metrics.
    """
    client = get_linear_client()
    args = UpdateIssueArgs(
        id=id, title=title, description=description, priority=priority, status=status
    )
    issue = await client.update_issue(args)
    return client.with_metrics({
        "text": f"Updated issue {issue['identifier']}\nURL: {issue['url']}",
        "issue": issue,
    })


@mcp.tool(name="linear_search_issues")
async def search_issues(
    query: str | None = None,
    team_id: str | None = None,
    status: str | None = None,
    assignee_id: str | None = None,
    labels: list[str] | None = None,
    priority: int | None = None,
    estimate: int | None = None,
    project_id: str | None = None,
    include_archived: bool = False,
    limit: int = 10,
) -> dict[str, Any]:
    """Search Linear issues by any combination of criteria.

    Args:
        query: Text matched against title and description. Optional.
        team_id: Filter by team ID. Optional.
        status: Filter by workflow state name (e.g. "In Progress"). Optional.
        assignee_id: Filter by assignee user ID. Optional.
        labels: Filter by label names. Optional.
        priority: Filter by priority (1 = urgent, 2 = high, 3 = normal, 4 = low). Optional.
        estimate: Filter by estimate points. Optional.
        project_id: Filter by project ID. Optional.
        include_archived: Include archived issues. Defaults to False.
        limit: Maximum number of results. Defaults to 10.

    Returns:
        Summary text, matching issues with status, assignee and labels, and API metrics.
    """
    client = get_linear_client()
    args = SearchIssuesArgs(
        query=query,
        team_id=team_id,
        status=status,
        assignee_id=assignee_id,
        labels=labels,
        priority=priority,
        estimate=estimate,
        project_id=project_id,
        include_archived=include_archived,
        limit=limit,
    )
    issues = await client.search_issues(args)
    return client.with_metrics({"text": format_issue_list(issues), "issues": issues})


@mcp.tool(name="linear_get_user_issues")
async def get_user_issues(
    user_id: str | None = None,
    include_archived: bool = False,
    limit: int = 50,
) -> dict[str, Any]:
    """Get issues assigned to a user, most recently updated first.

    Args:
        user_id: User ID. Omit for the authenticated user.
        include_archived: Include archived issues. Defaults to False.
        limit: Maximum number of issues. Defaults to 50.

    Returns:
        Summary text, assigned issues, and API metrics.
    """
    client = get_linear_client()
    args = GetUserIssuesArgs(user_id=user_id, include_archived=include_archived, limit=limit)
    issues = await client.get_user_issues(args)
    return client.with_metrics({
        "text": format_issue_list(issues, status_key="stateName"),
        "issues": issues,
    })


@mcp.tool(name="linear_add_comment")
async def add_comment(
    issue_id: str,
    body: str,
    create_as_user: str | None = None,
    display_icon_url: str | None = None,
) -> dict[str, Any]:
    """Add a markdown comment to a Linear issue.

    Args:
        issue_id: ID of the issue to comment on.
        body: Comment text in markdown.
        create_as_user: Custom display name for the comment author. Optional.
        display_icon_url: Custom avatar URL for the comment author. Optional.

    Returns:
        Summary text, the created comment, and API metrics.
    """
    client = get_linear_client()
    args = AddCommentArgs(
        issue_id=issue_id,
        body=body,
        create_as_user=create_as_user,
        display_icon_url=display_icon_url,
    )
    result = await client.add_comment(args)
    identifier = (result["issue"] or {}).get("identifier", issue_id)
    return client.with_metrics({
        "text": f"Added comment to issue {identifier}\nURL: {result['comment'].get('url')}",
        **result,
    })
