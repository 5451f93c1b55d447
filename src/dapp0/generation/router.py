"""Code generation router — POST /api/generate and POST /api/generate-ui."""

from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from dapp0.auth.dependencies import get_current_user
from dapp0.chains.registry import ChainType
from dapp0.database import get_session
from dapp0.db.models import ProjectType, User
from dapp0.generation.client import GenerationClient, GenerationError, get_generation_client
from dapp0.generation.prompts import build_enhanced_prompt
from dapp0.generation.schemas import GenerateRequest, GenerateResponse, GenerateUIRequest, GenerateUIResponse
from dapp0.generation.templates import fallback_code
from dapp0.generation.ui import build_ui_prompt, extract_component_names
from dapp0.projects.service import get_project, record_generation

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["Generation"])

FALLBACK_WARNING = "Using fallback code generation"


@router.post("/generate", response_model=GenerateResponse, response_model_exclude_none=True)
async def generate_code(
    body: GenerateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
    client: GenerationClient = Depends(get_generation_client),
) -> GenerateResponse:
    """
    Generate code for a prompt.

    Falls back to static per-chain code whenever the generation service fails,
    so this endpoint answers 200 for any valid request.
    """
    project = None
    if body.project_id is not None:
        project = await get_project(db, body.project_id, user.id)
        if project is None:
            raise HTTPException(status_code=404, detail="Project not found")

    warning = None
    try:
        code = await client.generate(build_enhanced_prompt(body.prompt, body.type, body.chain), body.type, body.chain)
    except GenerationError as e:
        logger.warning("generation_fallback", chain=body.chain.value, type=body.type.value, error=str(e))
        code = fallback_code(body.prompt, body.type, body.chain)
        warning = FALLBACK_WARNING

    timestamp = datetime.now(timezone.utc).isoformat()
    if project is not None:
        await record_generation(db, project, body.prompt, code, timestamp)
        await db.commit()

    return GenerateResponse(
        code=code,
        chain=body.chain,
        type=body.type,
        project_id=body.project_id,
        timestamp=timestamp,
        warning=warning,
    )


@router.post("/generate-ui", response_model=GenerateUIResponse)
async def generate_ui(
    body: GenerateUIRequest,
    user: User = Depends(get_current_user),
    client: GenerationClient = Depends(get_generation_client),
) -> GenerateUIResponse:
    """Generate a standalone React component, page or styling. No fallback: failures are 500."""
    prompt = build_ui_prompt(body.prompt, body.type, body.context)
    try:
        code = await client.generate(prompt, ProjectType.FRONTEND, ChainType.SOLANA)
    except GenerationError as e:
        logger.error("ui_generation_failed", user_id=str(user.id), type=body.type.value, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to generate UI component") from e

    return GenerateUIResponse(
        code=code,
        components=extract_component_names(code),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
