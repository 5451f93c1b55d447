"""
Login challenge nonces.

Each nonce lives in Redis under the wallet address it was issued for, expires
after a fixed TTL, and is consumed by the first verification attempt whether
or not that attempt succeeds.
"""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = structlog.get_logger()

NONCE_KEY_PREFIX = "auth:nonce:"


def build_login_message(prefix: str, nonce: str) -> str:
    """The exact text a wallet is asked to sign."""
    return f"{prefix}\n\n{nonce}"


class NonceStore:
    """Issues and consumes single-use login nonces."""

    def __init__(self, redis: Redis, ttl_seconds: int, message_prefix: str) -> None:
        self.redis = redis
        self.ttl_seconds = ttl_seconds
        self.message_prefix = message_prefix

    @staticmethod
    def _key(wallet_address: str) -> str:
        return f"{NONCE_KEY_PREFIX}{wallet_address}"

    async def issue(self, wallet_address: str) -> tuple[str, str]:
        """
        Generate a nonce for an address, replacing any outstanding one.

        Returns:
            Tuple of (nonce, message to sign).
        """
        nonce = secrets.token_hex(16)
        await self.redis.set(self._key(wallet_address), nonce, ex=self.ttl_seconds)
        logger.info("nonce_issued", wallet_address=wallet_address, ttl=self.ttl_seconds)
        return nonce, build_login_message(self.message_prefix, nonce)

    async def consume(self, wallet_address: str) -> str | None:
        """Atomically fetch and delete the outstanding nonce. None if expired or never issued."""
        return await self.redis.getdel(self._key(wallet_address))

    def expected_message(self, nonce: str) -> str:
        return build_login_message(self.message_prefix, nonce)
