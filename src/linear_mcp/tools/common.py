"""Text formatting shared by tools."""

from __future__ import annotations

from typing import Any


def format_issue_list(issues: list[dict[str, Any]], status_key: str = "status") -> str:
    lines = [f"Found {len(issues)} issues:"]
    for issue in issues:
        lines.append(
            f"- {issue['identifier']}: {issue['title']}\n"
            f"  Priority: {issue.get('priority') or 'None'}\n"
            f"  Status: {issue.get(status_key) or 'None'}\n"
            f"  {issue.get('url', '')}"
        )
    return "\n".join(lines)
