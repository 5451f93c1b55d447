"""GitHub router — /api/github/* endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from dapp0.auth.dependencies import get_current_user
from dapp0.database import get_session
from dapp0.db.models import User
from dapp0.github.client import GitHubClientFactory, GitHubError, get_github_client_factory
from dapp0.github.schemas import ExportRequest, ExportResponse, RepoListResponse, RepoSummary
from dapp0.github.service import export_project
from dapp0.projects.service import get_project

logger = structlog.get_logger()

router = APIRouter(prefix="/api/github", tags=["GitHub"])


def _require_token(user: User) -> str:
    if not user.github_access_token:
        raise HTTPException(status_code=400, detail="GitHub not connected")
    return user.github_access_token


@router.get("/repos", response_model=RepoListResponse)
async def list_repositories(
    user: User = Depends(get_current_user),
    client_factory: GitHubClientFactory = Depends(get_github_client_factory),
) -> RepoListResponse:
    """List the linked GitHub account's repositories."""
    client = client_factory(_require_token(user))
    try:
        repos = await client.list_repos()
    except GitHubError as e:
        logger.exception("github_list_repos_failed", user_id=str(user.id), status=e.status_code)
        raise HTTPException(status_code=500, detail="Failed to fetch repositories") from e
    return RepoListResponse(repos=[RepoSummary.model_validate(r) for r in repos])


@router.post("/export", response_model=ExportResponse)
async def export_to_github(
    body: ExportRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
    client_factory: GitHubClientFactory = Depends(get_github_client_factory),
) -> ExportResponse:
    """Export a project into a new or existing repository."""
    project = await get_project(db, body.project_id, user.id)
    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    client = client_factory(_require_token(user))

    try:
        repo_url = await export_project(
            client,
            user,
            project,
            repo_name=body.repo_name,
            create_new_repo=body.create_new_repo,
            repo_description=body.repo_description,
            is_private=body.is_private,
        )
    except GitHubError as e:
        logger.exception("github_export_failed", project_id=str(project.id), status=e.status_code)
        raise HTTPException(status_code=500, detail="Failed to export project") from e

    project.github_repo_url = repo_url
    await db.commit()
    return ExportResponse(repo_url=repo_url)
