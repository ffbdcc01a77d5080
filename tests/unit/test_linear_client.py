"""Tests for LinearClient using respx to mock httpx."""

from __future__ import annotations

import json

import pytest
import respx
from httpx import Response

from linear_mcp.governor import RequestGovernor
from linear_mcp.linear.client import LinearClient
from linear_mcp.linear.errors import (
    LinearAPIError,
    LinearAuthenticationError,
    LinearNotFoundError,
    LinearRateLimitError,
    LinearValidationError,
)
from linear_mcp.linear.models import (
    AddCommentArgs,
    CreateIssueArgs,
    GetUserIssuesArgs,
    SearchIssuesArgs,
    UpdateIssueArgs,
)

API_URL = "https://api.linear.app/graphql"

ISSUES = [
    {"id": "i1", "identifier": "ENG-1", "title": "First", "priority": 1, "url": "https://linear.app/i1"},
    {"id": "i2", "identifier": "ENG-2", "title": "Second", "priority": 3, "url": "https://linear.app/i2"},
    {"id": "i3", "identifier": "ENG-3", "title": "Third", "priority": 0, "url": "https://linear.app/i3"},
]

DETAILS = {
    "i1": {"id": "i1", "state": {"name": "Todo"}, "assignee": {"name": "Ada"}, "team": {"name": "Core"},
           "labels": {"nodes": [{"name": "bug"}]}},
    "i2": {"id": "i2", "state": {"name": "Done"}, "assignee": None, "team": {"name": "Core"},
           "labels": {"nodes": []}},
    "i3": {"id": "i3", "state": None, "assignee": None, "team": None, "labels": {"nodes": []}},
}


def graphql_handler(responses: dict[str, dict]):
    """Route a mocked GraphQL POST to a canned ``data`` payload by operation name."""

    def handler(request):
        body = json.loads(request.content)
        if "IssueDetails" in body["query"]:
            return Response(200, json={"data": {"issue": DETAILS[body["variables"]["id"]]}})
        for operation, data in responses.items():
            if f"{operation}(" in body["query"] or f"{operation} {{" in body["query"]:
                return Response(200, json={"data": data})
        return Response(400, json={"errors": [{"message": "unexpected query"}]})

    return handler


@pytest.fixture
async def client(clock):
    c = LinearClient(api_key="lin_api_test", governor=RequestGovernor(clock=clock, sleep=clock.sleep))
    yield c
    await c.close()


def test_requires_api_key():
    with pytest.raises(ValueError, match="LINEAR_API_KEY"):
        LinearClient(api_key="", governor=RequestGovernor())


@respx.mock
@pytest.mark.asyncio
async def test_sends_api_key_header(client):
    route = respx.post(API_URL).mock(
        side_effect=graphql_handler({"IssueLabels": {"issueLabels": {"nodes": []}}})
    )
    assert await client.get_labels() == []
    assert route.calls.last.request.headers["Authorization"] == "lin_api_test"


@respx.mock
@pytest.mark.asyncio
async def test_list_issues_enriches_each_issue(client):
    respx.post(API_URL).mock(side_effect=graphql_handler({"ListIssues": {"issues": {"nodes": ISSUES}}}))

    resources = await client.list_issues()

    assert [r["uri"] for r in resources] == ["linear://issue/i1", "linear://issue/i2", "linear://issue/i3"]
    assert resources[0]["metadata"] == {
        "identifier": "ENG-1",
        "priority": 1,
        "status": "Todo",
        "assignee": "Ada",
        "team": "Core",
    }
    assert resources[2]["metadata"]["status"] is None
    assert client.governor.get_metrics().total_requests == 4


@respx.mock
@pytest.mark.asyncio
async def test_get_issue(client):
    issue = {**ISSUES[0], "description": "Broken", "state": {"name": "Todo"}, "assignee": None,
             "team": {"name": "Core"}}
    respx.post(API_URL).mock(side_effect=graphql_handler({"GetIssue": {"issue": issue}}))

    result = await client.get_issue("i1")

    assert result["identifier"] == "ENG-1"
    assert result["status"] == "Todo"
    assert result["assignee"] is None
    assert result["team"] == "Core"


@respx.mock
@pytest.mark.asyncio
async def test_get_issue_not_found(client):
    respx.post(API_URL).mock(side_effect=graphql_handler({"GetIssue": {"issue": None}}))
    with pytest.raises(LinearNotFoundError, match="i404"):
        await client.get_issue("i404")


@respx.mock
@pytest.mark.asyncio
async def test_search_issues_sends_filter_and_keeps_order(client):
    route = respx.post(API_URL).mock(
        side_effect=graphql_handler({"SearchIssues": {"issues": {"nodes": ISSUES}}})
    )

    results = await client.search_issues(SearchIssuesArgs(query="crash", team_id="t1", limit=3))

    search_body = json.loads(route.calls[0].request.content)
    assert search_body["variables"]["first"] == 3
    assert search_body["variables"]["includeArchived"] is False
    assert search_body["variables"]["filter"]["team"] == {"id": {"eq": "t1"}}
    assert [r["identifier"] for r in results] == ["ENG-1", "ENG-2", "ENG-3"]
    assert results[0]["labels"] == ["bug"]
    assert results[1]["status"] == "Done"


@respx.mock
@pytest.mark.asyncio
async def test_get_user_issues_for_viewer(client):
    viewer = {"id": "u1", "name": "Ada", "assignedIssues": {"nodes": ISSUES[2:]}}
    respx.post(API_URL).mock(side_effect=graphql_handler({"ViewerAssignedIssues": {"viewer": viewer}}))

    results = await client.get_user_issues(GetUserIssuesArgs())

    assert results == [{
        "id": "i3",
        "identifier": "ENG-3",
        "title": "Third",
        "description": None,
        "priority": 0,
        "stateName": "Unknown",
        "url": "https://linear.app/i3",
    }]


@respx.mock
@pytest.mark.asyncio
async def test_get_user_issues_with_no_assignments(client):
    user = {"id": "u2", "name": "Bob", "assignedIssues": {"nodes": []}}
    respx.post(API_URL).mock(side_effect=graphql_handler({"UserAssignedIssues": {"user": user}}))

    assert await client.get_user_issues(GetUserIssuesArgs(user_id="u2")) == []


@respx.mock
@pytest.mark.asyncio
async def test_get_team_issues_unknown_team(client):
    respx.post(API_URL).mock(side_effect=graphql_handler({"TeamIssues": {"team": None}}))
    with pytest.raises(LinearNotFoundError, match="Team t9"):
        await client.get_team_issues("t9")


@respx.mock
@pytest.mark.asyncio
async def test_create_issue_sends_camel_case_input(client):
    route = respx.post(API_URL).mock(
        side_effect=graphql_handler({"IssueCreate": {"issueCreate": {"success": True, "issue": ISSUES[0]}}})
    )

    issue = await client.create_issue(
        CreateIssueArgs(title="First", team_id="t1", status="s1", label_ids=["l1"])
    )

    body = json.loads(route.calls.last.request.content)
    assert body["variables"]["input"] == {
        "title": "First",
        "teamId": "t1",
        "stateId": "s1",
        "labelIds": ["l1"],
    }
    assert issue["identifier"] == "ENG-1"


@respx.mock
@pytest.mark.asyncio
async def test_create_issue_unsuccessful(client):
    respx.post(API_URL).mock(
        side_effect=graphql_handler({"IssueCreate": {"issueCreate": {"success": False, "issue": None}}})
    )
    with pytest.raises(LinearAPIError, match="Failed to create issue"):
        await client.create_issue(CreateIssueArgs(title="x", team_id="t1"))


@pytest.mark.asyncio
async def test_update_issue_without_fields(client):
    with pytest.raises(LinearValidationError, match="No fields"):
        await client.update_issue(UpdateIssueArgs(id="i1"))
    assert client.governor.get_metrics().total_requests == 0


@respx.mock
@pytest.mark.asyncio
async def test_add_comment(client):
    comment = {"id": "c1", "body": "hi", "url": "https://linear.app/c1",
               "issue": {"id": "i1", "identifier": "ENG-1"}}
    route = respx.post(API_URL).mock(
        side_effect=graphql_handler({"CommentCreate": {"commentCreate": {"success": True, "comment": comment}}})
    )

    result = await client.add_comment(AddCommentArgs(issue_id="i1", body="hi", create_as_user="bot"))

    body = json.loads(route.calls.last.request.content)
    assert body["variables"]["input"] == {"issueId": "i1", "body": "hi", "createAsUser": "bot"}
    assert result["issue"]["identifier"] == "ENG-1"


@respx.mock
@pytest.mark.asyncio
async def test_get_organization(client):
    org = {"id": "o1", "name": "Acme", "urlKey": "acme",
           "teams": {"nodes": [{"id": "t1", "name": "Core", "key": "ENG"}]},
           "users": {"nodes": []}}
    respx.post(API_URL).mock(side_effect=graphql_handler({"Organization": {"organization": org}}))

    result = await client.get_organization()

    assert result["teams"] == [{"id": "t1", "name": "Core", "key": "ENG"}]
    assert result["users"] == []


@respx.mock
@pytest.mark.asyncio
async def test_auth_error(client):
    respx.post(API_URL).mock(return_value=Response(401, text="Unauthorized"))
    with pytest.raises(LinearAuthenticationError):
        await client.get_labels()


@respx.mock
@pytest.mark.asyncio
async def test_graphql_rate_limit_error(client):
    respx.post(API_URL).mock(
        return_value=Response(
            400,
            json={"errors": [{"message": "Rate limit exceeded", "extensions": {"code": "RATELIMITED"}}]},
        )
    )
    with pytest.raises(LinearRateLimitError) as exc_info:
        await client.list_projects()
    assert exc_info.value.errors[0]["extensions"]["code"] == "RATELIMITED"


@respx.mock
@pytest.mark.asyncio
async def test_graphql_error_with_ok_status(client):
    respx.post(API_URL).mock(
        return_value=Response(200, json={"data": None, "errors": [{"message": "Entity not found"}]})
    )
    with pytest.raises(LinearAPIError, match="Entity not found"):
        await client.get_project("p1")


@respx.mock
@pytest.mark.asyncio
async def test_failed_call_does_not_block_later_calls(client):
    respx.post(API_URL).mock(
        side_effect=[
            Response(500, text="Internal error"),
            Response(200, json={"data": {"projects": {"nodes": [{"id": "p1", "name": "Alpha"}]}}}),
        ]
    )

    with pytest.raises(LinearAPIError) as exc_info:
        await client.list_projects()
    assert exc_info.value.status_code == 500

    assert await client.list_projects() == [{"id": "p1", "name": "Alpha"}]
    assert client.governor.get_metrics().requests_in_last_hour == 2


@pytest.mark.asyncio
async def test_with_metrics_merges_metadata(client):
    payload = client.with_metrics({"issues": [], "metadata": {"source": "search"}})

    assert payload["issues"] == []
    assert payload["metadata"]["source"] == "search"
    assert payload["metadata"]["apiMetrics"]["remainingRequests"] == 1400
    assert payload["metadata"]["apiMetrics"]["averageRequestTime"] == "0ms"
