"""Shared test fixtures.

Every test gets a fresh in-memory SQLite database and an isolated fake Redis
server, so the suite runs without external services.
"""

from __future__ import annotations

import os

os.environ["DAPP0_DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DAPP0_LOG_FORMAT"] = "console"
os.environ["DAPP0_JWT_SECRET"] = "test-secret-with-enough-length-for-hs256"
os.environ["DAPP0_GENERATION_API_KEY"] = ""

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402

import fakeredis.aioredis  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from dapp0.auth.service import resolve_identity  # noqa: E402
from dapp0.auth.sessions import create_session_token  # noqa: E402
from dapp0.chains.registry import ChainType  # noqa: E402
from dapp0.config import get_settings  # noqa: E402
from dapp0.database import close_db, get_engine, get_session, init_db  # noqa: E402
from dapp0.db.base import Base  # noqa: E402
from dapp0.db.models import User  # noqa: E402
from dapp0.main import create_app  # noqa: E402
from dapp0.redis_client import close_redis, get_redis, use_redis  # noqa: E402
from tests.helpers import solana_address  # noqa: E402

SessionFactory = Callable[..., Awaitable[tuple[User, str]]]


@pytest_asyncio.fixture
async def app() -> AsyncGenerator[FastAPI, None]:
    """App wired to a fresh database and fake Redis."""
    get_settings.cache_clear()
    settings = get_settings()

    await init_db(settings.database_url)
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    use_redis(fakeredis.aioredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True))

    application = create_app()
    yield application

    application.dependency_overrides.clear()
    await close_db()
    await close_redis()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client talking to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def redis_client(app: FastAPI) -> object:  # noqa: ARG001
    return get_redis()


@pytest_asyncio.fixture
async def db_session(app: FastAPI) -> AsyncGenerator[AsyncSession, None]:  # noqa: ARG001
    """A direct database session for arranging data and asserting on it."""
    sessions = get_session()
    session = await anext(sessions)
    yield session
    await sessions.aclose()


@pytest_asyncio.fixture
async def make_session(app: FastAPI) -> SessionFactory:  # noqa: ARG001
    """Factory: create (or reuse) the user behind a wallet and mint a session token."""

    async def _make(wallet_address: str | None = None, chain: ChainType = ChainType.SOLANA) -> tuple[User, str]:
        address = wallet_address or solana_address()
        sessions = get_session()
        db = await anext(sessions)
        try:
            user, _ = await resolve_identity(db, address, chain)
            await db.commit()
        finally:
            await sessions.aclose()
        return user, create_session_token(user.id, address, chain.value)

    return _make


@pytest_asyncio.fixture
async def authed_client(client: AsyncClient, make_session: SessionFactory) -> AsyncClient:
    """Client carrying a valid session for a freshly created wallet user."""
    _user, token = await make_session()
    client.headers["Authorization"] = f"Bearer {token}"
    return client
