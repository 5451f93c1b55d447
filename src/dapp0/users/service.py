"""User profile business logic."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from dapp0.db.models import User

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


class ProfileConflictError(ValueError):
    """Raised when an email or username already belongs to another user."""


async def _taken_by_other(db: AsyncSession, column, value: str, user_id) -> bool:  # noqa: ANN001
    result = await db.execute(select(User.id).where(func.lower(column) == value.lower()).where(User.id != user_id))
    return result.first() is not None


async def update_profile(
    db: AsyncSession,
    user: User,
    email: str | None = None,
    username: str | None = None,
    avatar_url: str | None = None,
) -> User:
    """
    Complete or edit a user's profile. Only non-None fields are written.

    Raises:
        ProfileConflictError: If the email or username is taken.
    """
    if email is not None:
        if await _taken_by_other(db, User.email, email, user.id):
            msg = "Email already in use"
            raise ProfileConflictError(msg)
        user.email = email

    if username is not None:
        if await _taken_by_other(db, User.username, username, user.id):
            msg = "Username already taken"
            raise ProfileConflictError(msg)
        user.username = username

    if avatar_url is not None:
        user.avatar_url = avatar_url

    try:
        await db.flush()
    except IntegrityError as e:
        # A concurrent request claimed the value after the lookups above.
        await db.rollback()
        msg = "Email or username already in use"
        raise ProfileConflictError(msg) from e
    logger.info("profile_updated", user_id=str(user.id))
    return user


async def link_github(db: AsyncSession, user: User, github_username: str, access_token: str) -> User:
    user.github_username = github_username
    user.github_access_token = access_token
    await db.flush()
    logger.info("github_linked", user_id=str(user.id), github_username=github_username)
    return user


async def unlink_github(db: AsyncSession, user: User) -> User:
    user.github_username = None
    user.github_access_token = None
    await db.flush()
    logger.info("github_unlinked", user_id=str(user.id))
    return user
