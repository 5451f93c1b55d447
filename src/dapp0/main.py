"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from dapp0.auth.router import router as auth_router
from dapp0.chains.router import router as chains_router
from dapp0.config import get_settings
from dapp0.database import close_db, init_db
from dapp0.generation.router import router as generation_router
from dapp0.github.router import router as github_router
from dapp0.health.router import router as health_router
from dapp0.middleware import setup_middleware
from dapp0.projects.router import router as projects_router
from dapp0.redis_client import close_redis, init_redis
from dapp0.users.router import router as users_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the database engine and Redis pool for the app's lifetime."""
    settings = get_settings()
    await init_db(settings.database_url)
    await init_redis(settings.redis_url)
    logger.info("app_started", environment=settings.environment, version=settings.app_version)

    yield

    await close_db()
    await close_redis()
    logger.info("app_stopped")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="dApp0 API",
        description="Backend for dApp0: wallet sign-in, projects and AI code generation for multi-chain dApps",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(chains_router)
    app.include_router(projects_router)
    app.include_router(generation_router)
    app.include_router(github_router)

    return app


app = create_app()
