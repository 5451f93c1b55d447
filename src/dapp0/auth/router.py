"""Authentication router — all /api/auth/* endpoints."""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from dapp0.auth.dependencies import get_current_user, get_nonce_store, get_session_claims
from dapp0.auth.nonce import NonceStore
from dapp0.auth.schemas import (
    NonceRequest,
    NonceResponse,
    SessionResponse,
    UserResponse,
    VerifyRequest,
    VerifyResponse,
)
from dapp0.auth.service import needs_profile_setup, resolve_identity
from dapp0.auth.sessions import create_session_token, revoke_session
from dapp0.auth.signatures import verify_signature
from dapp0.config import get_settings
from dapp0.database import get_session
from dapp0.db.models import User
from dapp0.redis_client import get_redis

logger = structlog.get_logger()

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/nonce", response_model=NonceResponse)
async def issue_nonce(
    body: NonceRequest,
    nonces: NonceStore = Depends(get_nonce_store),
) -> NonceResponse:
    """Issue a single-use login challenge for a wallet address."""
    nonce, message = await nonces.issue(body.wallet_address)
    return NonceResponse(nonce=nonce, message=message, expires_in=nonces.ttl_seconds)


@router.post("/verify", response_model=VerifyResponse)
async def verify(
    body: VerifyRequest,
    nonces: NonceStore = Depends(get_nonce_store),
    db: AsyncSession = Depends(get_session),
) -> VerifyResponse:
    """Verify a signed challenge, resolve the identity and open a session."""
    # Single use: the nonce is gone after this call whatever the outcome.
    nonce = await nonces.consume(body.wallet_address)
    if nonce is None:
        raise HTTPException(status_code=400, detail="Nonce expired or not found")

    if body.message != nonces.expected_message(nonce):
        raise HTTPException(status_code=400, detail="Message does not match the issued nonce")

    if not verify_signature(body.wallet_address, body.signature, body.message, body.chain, body.public_key):
        raise HTTPException(status_code=400, detail="Invalid signature")

    user, created = await resolve_identity(db, body.wallet_address, body.chain)
    await db.commit()

    settings = get_settings()
    token = create_session_token(user.id, body.wallet_address, body.chain.value)
    logger.info("wallet_verified", user_id=str(user.id), chain=body.chain.value, new_user=created)

    return VerifyResponse(
        user=UserResponse.model_validate(user),
        needs_profile_setup=needs_profile_setup(user),
        access_token=token,
        expires_in=settings.session_token_expire_minutes * 60,
    )


@router.get("/session", response_model=SessionResponse)
async def current_session(user: User = Depends(get_current_user)) -> SessionResponse:
    """Return the user behind the current session."""
    return SessionResponse(
        user=UserResponse.model_validate(user),
        needs_profile_setup=needs_profile_setup(user),
    )


@router.post("/logout")
async def logout(
    claims: dict[str, Any] = Depends(get_session_claims),
    redis: Redis = Depends(get_redis),  # type: ignore[assignment]
) -> dict[str, str]:
    """Revoke the current session token."""
    await revoke_session(redis, claims)
    logger.info("session_revoked", user_id=claims["sub"])
    return {"status": "logged_out"}
