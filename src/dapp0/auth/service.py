"""
Identity resolution.

Maps a verified wallet address to a user, creating the user and its primary
wallet on first sight. Creation is an insert-or-return-existing: the wallet
insert uses ON CONFLICT DO NOTHING on the unique address, so two concurrent
first logins for one address end with a single user.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import delete, insert, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import selectinload

from dapp0.auth.signatures import canonical_address
from dapp0.db.models import User, Wallet

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from dapp0.chains.registry import ChainType

logger = structlog.get_logger()


# ---------------------------------------------------------------------------
# User queries
# ---------------------------------------------------------------------------


async def get_user_by_id(db: AsyncSession, user_id: uuid.UUID) -> User | None:
    """Fetch a user by ID with wallets loaded."""
    result = await db.execute(
        select(User)
        .options(selectinload(User.wallets))
        .where(User.id == user_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_wallet_by_address(db: AsyncSession, wallet_address: str) -> Wallet | None:
    result = await db.execute(select(Wallet).where(Wallet.wallet_address == wallet_address))
    return result.scalar_one_or_none()


def needs_profile_setup(user: User) -> bool:
    """A user must finish profile setup until both email and username are set."""
    return not user.email or not user.username


# ---------------------------------------------------------------------------
# Wallet auth: insert-or-return-existing
# ---------------------------------------------------------------------------


def _insert_wallet_if_absent(db: AsyncSession):  # noqa: ANN202
    """Dialect-specific INSERT ... ON CONFLICT (wallet_address) DO NOTHING."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(Wallet).on_conflict_do_nothing(index_elements=[Wallet.wallet_address])
    if dialect == "sqlite":
        return sqlite.insert(Wallet).on_conflict_do_nothing(index_elements=[Wallet.wallet_address])
    msg = f"Unsupported database dialect: {dialect}"
    raise RuntimeError(msg)


async def resolve_identity(
    db: AsyncSession,
    wallet_address: str,
    chain: ChainType,
) -> tuple[User, bool]:
    """
    Get the user owning a wallet, or create both.

    Returns:
        Tuple of (user with wallets loaded, created) where created is True if a
        new user was made.
    """
    wallet_address = canonical_address(wallet_address, chain)
    existing = await get_wallet_by_address(db, wallet_address)
    if existing is not None:
        user = await get_user_by_id(db, existing.user_id)
        if user is None:
            msg = f"Wallet {existing.id} references a missing user"
            raise RuntimeError(msg)
        return user, False

    now = datetime.now(timezone.utc)
    new_user_id = uuid.uuid4()
    await db.execute(insert(User).values(id=new_user_id, created_at=now, updated_at=now))

    stmt = (
        _insert_wallet_if_absent(db)
        .values(
            id=uuid.uuid4(),
            user_id=new_user_id,
            wallet_address=wallet_address,
            chain_type=chain,
            is_primary=True,
            created_at=now,
        )
        .returning(Wallet.id)
    )
    inserted = (await db.execute(stmt)).scalar_one_or_none()

    if inserted is None:
        # Another request bound this address between our lookup and insert.
        await db.execute(delete(User).where(User.id == new_user_id))
        winner = await get_wallet_by_address(db, wallet_address)
        if winner is None:
            msg = f"Wallet {wallet_address} vanished during identity resolution"
            raise RuntimeError(msg)
        user = await get_user_by_id(db, winner.user_id)
        if user is None:
            msg = f"Wallet {winner.id} references a missing user"
            raise RuntimeError(msg)
        logger.info("identity_race_resolved", wallet_address=wallet_address, user_id=str(user.id))
        return user, False

    user = await get_user_by_id(db, new_user_id)
    if user is None:
        msg = f"User {new_user_id} missing right after insert"
        raise RuntimeError(msg)
    logger.info("user_created", user_id=str(user.id), wallet_address=wallet_address, chain=chain.value)
    return user, True
