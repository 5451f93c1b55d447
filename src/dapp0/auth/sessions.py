"""
Session tokens.

A session is a signed JWT whose subject is the user id. Tokens carry the
wallet address and chain they were issued for, and a ``jti`` so a single
session can be revoked on logout.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

import jwt

from dapp0.config import get_settings

if TYPE_CHECKING:
    from redis.asyncio import Redis

REVOKED_KEY_PREFIX = "auth:revoked:"


def create_session_token(user_id: uuid.UUID, wallet_address: str, chain: str) -> str:
    """
    Create a session token for a freshly verified wallet.

    Args:
        user_id: The resolved user's id.
        wallet_address: Address whose signature was verified.
        chain: Chain the wallet signed on.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "address": wallet_address,
        "chain": chain,
        "jti": str(uuid.uuid4()),
        "iat": now,
        "exp": now + timedelta(minutes=settings.session_token_expire_minutes),
        "iss": settings.jwt_issuer,
        "type": "session",
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> dict[str, Any]:
    """
    Verify and decode a session token.

    Raises:
        jwt.InvalidTokenError: If the token is invalid, expired, or not a session token.
    """
    settings = get_settings()
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
            options={"require": ["sub", "exp", "jti"]},
        )
    except jwt.ExpiredSignatureError:
        msg = "Session has expired"
        raise jwt.InvalidTokenError(msg) from None

    if payload.get("type") != "session":
        msg = f"Expected token type 'session', got '{payload.get('type')}'"
        raise jwt.InvalidTokenError(msg)

    return payload


async def revoke_session(redis: Redis, payload: dict[str, Any]) -> None:
    """Deny-list a session id until the token would have expired anyway."""
    remaining = int(payload["exp"] - datetime.now(timezone.utc).timestamp())
    if remaining > 0:
        await redis.set(f"{REVOKED_KEY_PREFIX}{payload['jti']}", "1", ex=remaining)


async def is_session_revoked(redis: Redis, jti: str) -> bool:
    return bool(await redis.exists(f"{REVOKED_KEY_PREFIX}{jti}"))
