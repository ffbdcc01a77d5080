"""Async Linear GraphQL client using httpx.

Every round trip to Linear is routed through a :class:`RequestGovernor`.
Single reads and writes are submitted one by one; list-then-enrich
workflows fetch the list once and then the per-issue details in governed
groups of ``batch_size``.
"""

from __future__ import annotations

import functools
import logging
from typing import Any

import httpx

from linear_mcp.governor import RequestGovernor
from linear_mcp.linear import queries
from linear_mcp.linear.errors import (
    LinearAPIError,
    LinearAuthenticationError,
    LinearNotFoundError,
    LinearPermissionError,
    LinearRateLimitError,
    LinearValidationError,
)
from linear_mcp.linear.filters import build_search_filter
from linear_mcp.linear.models import (
    AddCommentArgs,
    CreateIssueArgs,
    GetUserIssuesArgs,
    SearchIssuesArgs,
    UpdateIssueArgs,
)

logger = logging.getLogger("linear_mcp")

DEFAULT_API_URL = "https://api.linear.app/graphql"

_ERROR_MAP: dict[int, type[LinearAPIError]] = {
    400: LinearValidationError,
    401: LinearAuthenticationError,
    403: LinearPermissionError,
    404: LinearNotFoundError,
    429: LinearRateLimitError,
}

_GRAPHQL_CODE_MAP: dict[str, type[LinearAPIError]] = {
    "AUTHENTICATION_ERROR": LinearAuthenticationError,
    "FORBIDDEN": LinearPermissionError,
    "ENTITY_NOT_FOUND": LinearNotFoundError,
    "INVALID_INPUT": LinearValidationError,
    "GRAPHQL_VALIDATION_FAILED": LinearValidationError,
    "RATELIMITED": LinearRateLimitError,
}


def _graphql_error(errors: list[dict[str, Any]], status_code: int | None = None) -> LinearAPIError:
    message = "; ".join(str(e.get("message", "unknown error")) for e in errors)
    error: LinearAPIError | None = None
    for e in errors:
        code = str((e.get("extensions") or {}).get("code", "")).upper()
        if code in _GRAPHQL_CODE_MAP:
            error = _GRAPHQL_CODE_MAP[code](f"Linear API error: {message}")
            break
    if error is None:
        error_cls = _ERROR_MAP.get(status_code or 0)
        if error_cls is not None:
            error = error_cls(f"Linear API error: {message}")
        else:
            error = LinearAPIError(f"Linear API error: {message}", status_code=status_code)
    error.errors = errors
    return error


def _name(node: dict[str, Any] | None) -> str | None:
    return node.get("name") if node else None


class LinearClient:
    """Async wrapper around the Linear GraphQL API."""

    def __init__(
        self,
        api_key: str,
        governor: RequestGovernor,
        api_url: str = DEFAULT_API_URL,
        timeout: int = 30,
        ssl_verify: bool | str = True,
        batch_size: int = 5,
    ):
        if not api_key:
            raise ValueError("LINEAR_API_KEY is required")
        self.governor = governor
        self.batch_size = batch_size
        self._api_url = api_url
        self._client = httpx.AsyncClient(
            headers={"Authorization": api_key, "Content-Type": "application/json"},
            timeout=timeout,
            verify=ssl_verify,
        )

    async def close(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------

    async def _execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """One GraphQL round trip, outside the governor."""
        response = await self._client.post(
            self._api_url, json={"query": query, "variables": variables or {}}
        )
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.status_code >= 400:
            if isinstance(payload, dict) and payload.get("errors"):
                raise _graphql_error(payload["errors"], response.status_code)
            error_cls = _ERROR_MAP.get(response.status_code)
            message = f"Linear API request failed ({response.status_code}): {response.text}"
            if error_cls is None:
                raise LinearAPIError(message, status_code=response.status_code)
            raise error_cls(message)

        if not isinstance(payload, dict):
            raise LinearAPIError(f"Unexpected response from Linear API: {response.text}")
        if payload.get("errors"):
            raise _graphql_error(payload["errors"])
        return payload.get("data") or {}

    async def _request(
        self, query: str, variables: dict[str, Any] | None = None, label: str | None = None
    ) -> dict[str, Any]:
        """One governed GraphQL round trip."""
        return await self.governor.submit(functools.partial(self._execute, query, variables), label)

    async def _fetch_issue_details(self, issue: dict[str, Any]) -> dict[str, Any]:
        data = await self._execute(queries.ISSUE_DETAILS_QUERY, {"id": issue["id"]})
        return data.get("issue") or {}

    async def _with_details(self, issues: list[dict[str, Any]], label: str) -> list[tuple[dict, dict]]:
        details = await self.governor.batch(issues, self.batch_size, self._fetch_issue_details, label)
        return list(zip(issues, details))

    def with_metrics(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Return ``payload`` with the governor's ``apiMetrics`` under ``metadata``."""
        metadata = {**payload.get("metadata", {}), "apiMetrics": self.governor.api_metrics()}
        return {**payload, "metadata": metadata}

    # ------------------------------------------------------------------
    # Issues
    # ------------------------------------------------------------------

    async def list_issues(self, first: int = 10) -> list[dict[str, Any]]:
        data = await self._request(queries.LIST_ISSUES_QUERY, {"first": first}, "listIssues")
        issues = data.get("issues", {}).get("nodes", [])

        resources = []
        for issue, details in await self._with_details(issues, "getIssueDetails"):
            resources.append({
                "uri": f"linear://issue/{issue['id']}",
                "mimeType": "application/json",
                "name": issue["title"],
                "description": f"Linear issue {issue['identifier']}: {issue['title']}",
                "metadata": {
                    "identifier": issue["identifier"],
                    "priority": issue.get("priority"),
                    "status": _name(details.get("state")),
                    "assignee": _name(details.get("assignee")),
                    "team": _name(details.get("team")),
                },
            })
        return resources

    async def get_issue(self, issue_id: str) -> dict[str, Any]:
        data = await self._request(queries.GET_ISSUE_QUERY, {"id": issue_id}, f"getIssue ({issue_id})")
        issue = data.get("issue")
        if not issue:
            raise LinearNotFoundError(f"Issue {issue_id} not found")

        return {
            "id": issue["id"],
            "identifier": issue["identifier"],
            "title": issue["title"],
            "description": issue.get("description"),
            "priority": issue.get("priority"),
            "status": _name(issue.get("state")),
            "assignee": _name(issue.get("assignee")),
            "team": _name(issue.get("team")),
            "url": issue.get("url"),
        }

    async def search_issues(self, args: SearchIssuesArgs) -> list[dict[str, Any]]:
        variables = {
            "filter": build_search_filter(args),
            "first": args.limit,
            "includeArchived": args.include_archived,
        }
        data = await self._request(queries.SEARCH_ISSUES_QUERY, variables, "searchIssues")
        issues = data.get("issues", {}).get("nodes", [])

        return [
            {
                "id": issue["id"],
                "identifier": issue["identifier"],
                "title": issue["title"],
                "description": issue.get("description"),
                "priority": issue.get("priority"),
                "estimate": issue.get("estimate"),
                "status": _name(details.get("state")),
                "assignee": _name(details.get("assignee")),
                "labels": [label["name"] for label in (details.get("labels") or {}).get("nodes", [])],
                "url": issue.get("url"),
            }
            for issue, details in await self._with_details(issues, "searchIssues.details")
        ]

    async def get_user_issues(self, args: GetUserIssuesArgs) -> list[dict[str, Any]]:
        variables: dict[str, Any] = {"first": args.limit, "includeArchived": args.include_archived}
        if args.user_id:
            variables["id"] = args.user_id
            data = await self._request(
                queries.USER_ASSIGNED_ISSUES_QUERY, variables, f"getUser ({args.user_id})"
            )
            user = data.get("user")
        else:
            data = await self._request(queries.VIEWER_ASSIGNED_ISSUES_QUERY, variables, "getViewer")
            user = data.get("viewer")
        if not user:
            raise LinearNotFoundError(f"User {args.user_id or 'me'} not found")

        issues = (user.get("assignedIssues") or {}).get("nodes") or []
        if not issues:
            return []

        return [
            {
                "id": issue["id"],
                "identifier": issue["identifier"],
                "title": issue["title"],
                "description": issue.get("description"),
                "priority": issue.get("priority"),
                "stateName": _name(details.get("state")) or "Unknown",
                "url": issue.get("url"),
            }
            for issue, details in await self._with_details(issues, "getUserIssues")
        ]

    async def get_team_issues(self, team_id: str) -> list[dict[str, Any]]:
        data = await self._request(queries.TEAM_ISSUES_QUERY, {"id": team_id}, f"getTeam ({team_id})")
        team = data.get("team")
        if not team:
            raise LinearNotFoundError(f"Team {team_id} not found")

        issues = (team.get("issues") or {}).get("nodes") or []
        return [
            {
                "id": issue["id"],
                "identifier": issue["identifier"],
                "title": issue["title"],
                "description": issue.get("description"),
                "priority": issue.get("priority"),
                "status": _name(details.get("state")),
                "assignee": _name(details.get("assignee")),
                "url": issue.get("url"),
            }
            for issue, details in await self._with_details(issues, "getTeamIssues")
        ]

    async def create_issue(self, args: CreateIssueArgs) -> dict[str, Any]:
        data = await self._request(
            queries.ISSUE_CREATE_MUTATION, {"input": args.to_input()}, "createIssue"
        )
        payload = data.get("issueCreate") or {}
        if not payload.get("success") or not payload.get("issue"):
            raise LinearAPIError("Failed to create issue")
        return payload["issue"]

    async def update_issue(self, args: UpdateIssueArgs) -> dict[str, Any]:
        fields = args.to_input()
        if not fields:
            raise LinearValidationError(f"No fields to update for issue {args.id}.")

        data = await self._request(
            queries.ISSUE_UPDATE_MUTATION, {"id": args.id, "input": fields}, f"updateIssue ({args.id})"
        )
        payload = data.get("issueUpdate") or {}
        if not payload.get("success") or not payload.get("issue"):
            raise LinearAPIError(f"Failed to update issue {args.id}")
        return payload["issue"]

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    async def add_comment(self, args: AddCommentArgs) -> dict[str, Any]:
        data = await self._request(
            queries.COMMENT_CREATE_MUTATION, {"input": args.to_input()}, f"addComment ({args.issue_id})"
        )
        payload = data.get("commentCreate") or {}
        comment = payload.get("comment")
        if not payload.get("success") or not comment:
            raise LinearAPIError("Failed to create comment")
        return {"comment": comment, "issue": comment.get("issue")}

    # ------------------------------------------------------------------
    # Labels and projects
    # ------------------------------------------------------------------

    async def get_labels(self, limit: int = 100) -> list[dict[str, Any]]:
        data = await self._request(queries.LABELS_QUERY, {"first": limit}, "getLabels")
        return data.get("issueLabels", {}).get("nodes", [])

    async def list_projects(self, limit: int = 5) -> list[dict[str, Any]]:
        data = await self._request(queries.PROJECTS_QUERY, {"first": limit}, "listProjects")
        return data.get("projects", {}).get("nodes", [])

    async def get_project(self, project_id: str) -> dict[str, Any]:
        data = await self._request(
            queries.PROJECT_QUERY, {"id": project_id}, f"getProject ({project_id})"
        )
        project = data.get("project")
        if not project:
            raise LinearNotFoundError(f"Project {project_id} not found")
        return project

    # ------------------------------------------------------------------
    # Viewer and organization
    # ------------------------------------------------------------------

    async def get_viewer(self) -> dict[str, Any]:
        data = await self._request(queries.VIEWER_QUERY, label="getViewer")
        viewer = data.get("viewer") or {}
        return {
            "id": viewer.get("id"),
            "name": viewer.get("name"),
            "email": viewer.get("email"),
            "admin": viewer.get("admin"),
            "teams": (viewer.get("teams") or {}).get("nodes", []),
            "organization": data.get("organization"),
        }

    async def get_organization(self) -> dict[str, Any]:
        data = await self._request(queries.ORGANIZATION_QUERY, label="getOrganization")
        organization = data.get("organization") or {}
        return {
            "id": organization.get("id"),
            "name": organization.get("name"),
            "urlKey": organization.get("urlKey"),
            "teams": (organization.get("teams") or {}).get("nodes", []),
            "users": (organization.get("users") or {}).get("nodes", []),
        }
