"""Workspace tools: labels, projects, and API usage."""

from __future__ import annotations

from typing import Any

from linear_mcp.lifespan import get_linear_client
from linear_mcp.server import mcp


@mcp.tool(name="linear_get_labels")
async def get_labels(limit: int = 100) -> dict[str, Any]:
    """List issue labels in the workspace.

    Args:
        limit: Maximum number of labels. Defaults to 100.

    Returns:
        Summary text, labels with id and name, and API metrics.
    """
    client = get_linear_client()
    labels = await client.get_labels(limit)
    lines = [f"Found {len(labels)} labels:"]
    lines.extend(f"- {label['name']} (ID: {label['id']})" for label in labels)
    return client.with_metrics({"text": "\n".join(lines), "labels": labels})


@mcp.tool(name="linear_list_projects")
async def list_projects(limit: int = 5) -> dict[str, Any]:
    """List Linear projects with basic information.

    Args:
        limit: Maximum number of projects. Defaults to 5.
    """
    client = get_linear_client()
    projects = await client.list_projects(limit)
    blocks = [
        f"- {p['name']}\n  ID: {p['id']}\n  Description: {p.get('description') or 'None'}\n  URL: {p.get('url')}"
        for p in projects
    ]
    text = f"Found {len(projects)} projects:\n" + "\n\n".join(blocks)
    return client.with_metrics({"text": text, "projects": projects})


@mcp.tool(name="linear_get_project")
async def get_project(project_id: str) -> dict[str, Any]:
    """Get a project with its milestones, recent updates, and documents.

    To list the project's issues, use linear_search_issues with project_id.

    Args:
        project_id: ID of the project.
    """
    client = get_linear_client()
    project = await client.get_project(project_id)
    return client.with_metrics({
        "text": f"Project {project['name']} ({project.get('state')})\nURL: {project.get('url')}",
        "project": project,
    })


@mcp.tool(name="linear_get_api_metrics")
async def get_api_metrics() -> dict[str, Any]:
    """Report Linear API usage against the hourly quota. Makes no API call."""
    client = get_linear_client()
    metrics = client.governor.get_metrics()
    return client.with_metrics({
        "text": (
            f"{metrics.requests_in_last_hour}/{client.governor.hourly_quota} requests in the last hour, "
            f"{metrics.queue_length} queued"
        ),
        "metrics": metrics.model_dump(),
    })
