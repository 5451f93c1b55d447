"""FastAPI authentication dependencies."""

from __future__ import annotations

import uuid
from typing import Any

import jwt
from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from dapp0.auth.nonce import NonceStore
from dapp0.auth.service import get_user_by_id
from dapp0.auth.sessions import decode_session_token, is_session_revoked
from dapp0.config import get_settings
from dapp0.database import get_session
from dapp0.db.models import User
from dapp0.redis_client import get_redis

_bearer = HTTPBearer(auto_error=False)


def get_nonce_store(redis: Redis = Depends(get_redis)) -> NonceStore:  # type: ignore[assignment]
    """Nonce store bound to the shared Redis client."""
    settings = get_settings()
    return NonceStore(
        redis,
        ttl_seconds=settings.nonce_ttl_seconds,
        message_prefix=settings.login_message_prefix,
    )


async def get_session_claims(
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),
    redis: Redis = Depends(get_redis),  # type: ignore[assignment]
) -> dict[str, Any]:
    """Decode the bearer session token. 401 when missing, invalid, expired or revoked."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        payload = decode_session_token(credentials.credentials)
    except jwt.InvalidTokenError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e

    if await is_session_revoked(redis, payload["jti"]):
        raise HTTPException(status_code=401, detail="Session has been revoked")
    return payload


async def get_current_user(
    claims: dict[str, Any] = Depends(get_session_claims),
    db: AsyncSession = Depends(get_session),
) -> User:
    """Return the User the session token was issued to."""
    try:
        user_id = uuid.UUID(claims["sub"])
    except ValueError as e:
        raise HTTPException(status_code=401, detail="Invalid session subject") from e

    user = await get_user_by_id(db, user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="User not found")
    return user
