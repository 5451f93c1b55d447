"""Request/response schemas for projects."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import Field

from dapp0.chains.registry import ChainType
from dapp0.db.models import ProjectType
from dapp0.schemas import ApiModel


class ProjectCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: ProjectType
    chain: ChainType
    generated_code: str | None = None
    messages: list[Any] = Field(default_factory=list)
    is_public: bool = False


class ProjectUpdate(ApiModel):
    """Partial update. Only fields present in the body are written."""

    name: str | None = Field(None, min_length=1, max_length=255)
    generated_code: str | None = None
    messages: list[Any] | None = None
    is_public: bool | None = None
    github_repo_url: str | None = None


class ProjectResponse(ApiModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    type: ProjectType
    chain: ChainType
    generated_code: str | None = None
    messages: list[Any] = Field(default_factory=list)
    is_public: bool = False
    github_repo_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
