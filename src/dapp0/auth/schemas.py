"""Request/response schemas for wallet authentication and user payloads."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import Field, model_validator

from dapp0.auth.signatures import canonical_address
from dapp0.chains.registry import ChainType
from dapp0.schemas import ApiModel

# ---------------------------------------------------------------------------
# Wallet auth
# ---------------------------------------------------------------------------


class NonceRequest(ApiModel):
    """Request a login challenge for a wallet."""

    wallet_address: str = Field(..., min_length=1, max_length=128)
    chain: ChainType | None = None

    @model_validator(mode="after")
    def canonicalize_address(self) -> NonceRequest:
        self.wallet_address = canonical_address(self.wallet_address, self.chain)
        return self


class NonceResponse(ApiModel):
    """Challenge nonce and the exact message to sign."""

    nonce: str
    message: str
    expires_in: int


class VerifyRequest(ApiModel):
    """Signed challenge. ``public_key`` is only needed for chains without key recovery (XRP)."""

    wallet_address: str = Field(..., min_length=1, max_length=128)
    signature: str = Field(..., min_length=1)
    chain: ChainType
    message: str = Field(..., min_length=1)
    public_key: str | None = None

    @model_validator(mode="after")
    def canonicalize_address(self) -> VerifyRequest:
        """One spelling per address, so the nonce key and the stored wallet agree."""
        self.wallet_address = canonical_address(self.wallet_address, self.chain)
        return self


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class WalletResponse(ApiModel):
    id: uuid.UUID
    wallet_address: str
    chain_type: ChainType
    is_primary: bool
    created_at: datetime | None = None


class UserResponse(ApiModel):
    """Full user profile. The GitHub access token is never returned."""

    id: uuid.UUID
    email: str | None = None
    username: str | None = None
    avatar_url: str | None = None
    github_username: str | None = None
    wallets: list[WalletResponse] = []
    created_at: datetime | None = None


class VerifyResponse(ApiModel):
    """Issued session after a successful wallet verification."""

    user: UserResponse
    needs_profile_setup: bool
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class SessionResponse(ApiModel):
    user: UserResponse
    needs_profile_setup: bool
