"""Project router — all /api/projects/* endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from dapp0.auth.dependencies import get_current_user
from dapp0.database import get_session
from dapp0.db.models import User
from dapp0.projects.schemas import ProjectCreate, ProjectResponse, ProjectUpdate
from dapp0.projects.service import (
    create_project,
    delete_project,
    get_project,
    list_projects,
    list_public_projects,
    update_project,
)

router = APIRouter(prefix="/api/projects", tags=["Projects"])


@router.get("", response_model=list[ProjectResponse])
async def list_my_projects(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> list[ProjectResponse]:
    """List the current user's projects."""
    projects = await list_projects(db, user.id)
    return [ProjectResponse.model_validate(p) for p in projects]


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_my_project(
    body: ProjectCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> ProjectResponse:
    project = await create_project(
        db,
        user.id,
        name=body.name,
        type=body.type,
        chain=body.chain,
        generated_code=body.generated_code,
        messages=body.messages,
        is_public=body.is_public,
    )
    await db.commit()
    return ProjectResponse.model_validate(project)


@router.get("/public", response_model=list[ProjectResponse])
async def list_public(db: AsyncSession = Depends(get_session)) -> list[ProjectResponse]:
    """Showcase of projects their owners made public. No auth required."""
    projects = await list_public_projects(db)
    return [ProjectResponse.model_validate(p) for p in projects]


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_my_project(
    project_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> ProjectResponse:
    project = await get_project(db, project_id, user.id)
    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return ProjectResponse.model_validate(project)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_my_project(
    project_id: uuid.UUID,
    body: ProjectUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> ProjectResponse:
    """Partially update a project. An empty body is rejected."""
    fields = body.model_dump(exclude_unset=True, exclude_none=True)
    try:
        project = await update_project(db, project_id, user.id, fields)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    await db.commit()
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}")
async def delete_my_project(
    project_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> dict[str, str]:
    """Delete a project permanently."""
    if not await delete_project(db, project_id, user.id):
        raise HTTPException(status_code=404, detail="Project not found")
    await db.commit()
    return {"status": "deleted", "message": "Project deleted successfully"}
