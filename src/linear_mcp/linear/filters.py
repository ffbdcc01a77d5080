"""Build Linear ``IssueFilter`` objects from search arguments."""

from __future__ import annotations

from typing import Any

from linear_mcp.linear.models import SearchIssuesArgs


def build_search_filter(args: SearchIssuesArgs) -> dict[str, Any]:
    """Translate search arguments into a GraphQL ``IssueFilter``.

    Criteria are combined with AND; free text matches title or description.
    """
    issue_filter: dict[str, Any] = {}

    if args.query:
        issue_filter["or"] = [
            {"title": {"containsIgnoreCase": args.query}},
            {"description": {"containsIgnoreCase": args.query}},
        ]
    if args.team_id:
        issue_filter["team"] = {"id": {"eq": args.team_id}}
    if args.status:
        issue_filter["state"] = {"name": {"eq": args.status}}
    if args.assignee_id:
        issue_filter["assignee"] = {"id": {"eq": args.assignee_id}}
    if args.labels:
        issue_filter["labels"] = {"some": {"name": {"in": args.labels}}}
    if args.priority is not None:
        issue_filter["priority"] = {"eq": args.priority}
    if args.estimate is not None:
        issue_filter["estimate"] = {"eq": args.estimate}
    if args.project_id:
        issue_filter["project"] = {"id": {"eq": args.project_id}}

    return issue_filter
