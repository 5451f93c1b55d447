"""User management router — all /api/users/* endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from dapp0.auth.dependencies import get_current_user
from dapp0.auth.schemas import UserResponse
from dapp0.auth.service import get_user_by_id
from dapp0.database import get_session
from dapp0.db.models import User
from dapp0.users.schemas import GitHubLinkRequest, ProfileUpdateRequest
from dapp0.users.service import ProfileConflictError, link_github, unlink_github, update_profile

router = APIRouter(prefix="/api/users", tags=["Users"])


async def _reloaded(db: AsyncSession, user: User) -> UserResponse:
    fresh = await get_user_by_id(db, user.id)
    return UserResponse.model_validate(fresh or user)


@router.get("/me", response_model=UserResponse)
async def get_profile(user: User = Depends(get_current_user)) -> UserResponse:
    """Get own profile with linked wallets."""
    return UserResponse.model_validate(user)


@router.patch("/me", response_model=UserResponse)
async def update_my_profile(
    body: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> UserResponse:
    """Profile setup: email, username, avatar."""
    fields = body.model_dump(exclude_unset=True, exclude_none=True)
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")
    try:
        user = await update_profile(db, user, **fields)
    except ProfileConflictError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    await db.commit()
    return await _reloaded(db, user)


@router.put("/me/github", response_model=UserResponse)
async def connect_github(
    body: GitHubLinkRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> UserResponse:
    """Store the GitHub account used for project export."""
    user = await link_github(db, user, body.github_username, body.access_token)
    await db.commit()
    return await _reloaded(db, user)


@router.delete("/me/github", response_model=UserResponse)
async def disconnect_github(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> UserResponse:
    user = await unlink_github(db, user)
    await db.commit()
    return await _reloaded(db, user)
