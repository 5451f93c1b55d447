"""Request/response schemas for code generation."""

from __future__ import annotations

import uuid

from pydantic import Field

from dapp0.chains.registry import ChainType
from dapp0.db.models import ProjectType
from dapp0.generation.ui import UIType
from dapp0.schemas import ApiModel


class GenerateRequest(ApiModel):
    prompt: str = Field(..., min_length=1, max_length=10000)
    type: ProjectType
    chain: ChainType
    project_id: uuid.UUID | None = None


class GenerateResponse(ApiModel):
    code: str
    chain: ChainType
    type: ProjectType
    project_id: uuid.UUID | None = None
    timestamp: str
    warning: str | None = None


class GenerateUIRequest(ApiModel):
    prompt: str = Field(..., min_length=1, max_length=10000)
    type: UIType
    context: str | None = Field(None, max_length=2000)


class GenerateUIResponse(ApiModel):
    code: str
    components: list[str]
    timestamp: str
