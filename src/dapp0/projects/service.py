"""
Project persistence.

Every owner-facing query filters on both the project id and the owning user
id, so a project id alone never reaches another user's row.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import delete, select

from dapp0.db.models import Project

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from dapp0.chains.registry import ChainType
    from dapp0.db.models import ProjectType

logger = structlog.get_logger()

UPDATABLE_FIELDS = frozenset({"name", "generated_code", "messages", "is_public", "github_repo_url"})


async def list_projects(db: AsyncSession, user_id: uuid.UUID) -> Sequence[Project]:
    """The user's projects, most recently updated first."""
    result = await db.execute(
        select(Project).where(Project.user_id == user_id).order_by(Project.updated_at.desc())
    )
    return result.scalars().all()


async def list_public_projects(db: AsyncSession, limit: int = 50) -> Sequence[Project]:
    result = await db.execute(
        select(Project).where(Project.is_public.is_(True)).order_by(Project.created_at.desc()).limit(limit)
    )
    return result.scalars().all()


async def get_project(db: AsyncSession, project_id: uuid.UUID, user_id: uuid.UUID) -> Project | None:
    """Fetch a project only if it belongs to the user."""
    result = await db.execute(
        select(Project).where(Project.id == project_id).where(Project.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def create_project(
    db: AsyncSession,
    user_id: uuid.UUID,
    name: str,
    type: ProjectType,  # noqa: A002
    chain: ChainType,
    generated_code: str | None = None,
    messages: list[Any] | None = None,
    is_public: bool = False,
) -> Project:
    project = Project(
        user_id=user_id,
        name=name,
        type=type,
        chain=chain,
        generated_code=generated_code,
        messages=list(messages or []),
        is_public=is_public,
    )
    db.add(project)
    await db.flush()
    await db.refresh(project)
    logger.info("project_created", project_id=str(project.id), user_id=str(user_id), chain=chain.value)
    return project


async def update_project(
    db: AsyncSession,
    project_id: uuid.UUID,
    user_id: uuid.UUID,
    fields: dict[str, Any],
) -> Project | None:
    """
    Write the given fields onto an owned project.

    Returns:
        The updated project, or None if the user owns no project with that id.

    Raises:
        ValueError: If ``fields`` is empty or names a field that cannot be updated.
    """
    if not fields:
        msg = "No fields to update"
        raise ValueError(msg)
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        msg = f"Cannot update fields: {', '.join(sorted(unknown))}"
        raise ValueError(msg)

    project = await get_project(db, project_id, user_id)
    if project is None:
        return None

    for key, value in fields.items():
        setattr(project, key, value)
    # Set explicitly: onupdate does not fire when every value is unchanged.
    project.updated_at = datetime.now(timezone.utc)
    await db.flush()
    await db.refresh(project)
    logger.info("project_updated", project_id=str(project_id), fields=sorted(fields))
    return project


async def delete_project(db: AsyncSession, project_id: uuid.UUID, user_id: uuid.UUID) -> bool:
    """Delete an owned project. Returns True if a row was removed."""
    result = await db.execute(
        delete(Project).where(Project.id == project_id).where(Project.user_id == user_id)
    )
    deleted = bool(result.rowcount)
    if deleted:
        logger.info("project_deleted", project_id=str(project_id), user_id=str(user_id))
    return deleted


async def record_generation(
    db: AsyncSession,
    project: Project,
    prompt: str,
    code: str,
    timestamp: str,
) -> Project:
    """Store generated code on a project and append the exchange to its chat."""
    project.generated_code = code
    project.messages = [
        *(project.messages or []),
        {"role": "user", "content": prompt, "timestamp": timestamp},
        {"role": "assistant", "content": code, "timestamp": timestamp},
    ]
    await db.flush()
    return project
