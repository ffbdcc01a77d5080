"""Pydantic models for Linear tool arguments.

Field names are snake_case for Python callers; aliases are the camelCase
names the Linear GraphQL API expects in mutation inputs.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class _LinearInput(BaseModel):
    model_config = {"populate_by_name": True}

    def to_input(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class CreateIssueArgs(_LinearInput):
    title: str
    team_id: str = Field(alias="teamId")
    description: str | None = None
    priority: int | None = Field(default=None, ge=0, le=4)
    status: str | None = Field(default=None, alias="stateId")
    estimate: int | None = None
    label_ids: list[str] | None = Field(default=None, alias="labelIds")


class UpdateIssueArgs(_LinearInput):
    id: str
    title: str | None = None
    description: str | None = None
    priority: int | None = Field(default=None, ge=0, le=4)
    status: str | None = Field(default=None, alias="stateId")

    def to_input(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"id"})


class SearchIssuesArgs(BaseModel):
    query: str | None = None
    team_id: str | None = None
    status: str | None = None
    assignee_id: str | None = None
    labels: list[str] | None = None
    priority: int | None = Field(default=None, ge=0, le=4)
    estimate: int | None = None
    project_id: str | None = None
    include_archived: bool = False
    limit: int = Field(default=10, ge=1, le=250)


class GetUserIssuesArgs(BaseModel):
    user_id: str | None = None
    include_archived: bool = False
    limit: int = Field(default=50, ge=1, le=250)


class AddCommentArgs(_LinearInput):
    issue_id: str = Field(alias="issueId")
    body: str
    create_as_user: str | None = Field(default=None, alias="createAsUser")
    display_icon_url: str | None = Field(default=None, alias="displayIconUrl")
