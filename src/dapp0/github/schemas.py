"""Request/response schemas for GitHub export."""

from __future__ import annotations

import uuid

from pydantic import Field

from dapp0.schemas import ApiModel


class RepoSummary(ApiModel):
    id: int
    name: str
    full_name: str
    description: str | None = None
    html_url: str
    clone_url: str | None = None
    private: bool = False
    created_at: str | None = None
    updated_at: str | None = None


class RepoListResponse(ApiModel):
    repos: list[RepoSummary]


class ExportRequest(ApiModel):
    project_id: uuid.UUID
    repo_name: str = Field(..., min_length=1, max_length=100, pattern=r"^[A-Za-z0-9._-]+$")
    create_new_repo: bool = False
    repo_description: str | None = Field(None, max_length=350)
    is_private: bool = False


class ExportResponse(ApiModel):
    repo_url: str
    message: str = "Project exported successfully"
