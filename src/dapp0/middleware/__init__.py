"""Middleware and exception handler registration."""

from fastapi import FastAPI

from dapp0.config import Settings
from dapp0.middleware.cors import setup_cors
from dapp0.middleware.error_handler import setup_error_handlers
from dapp0.middleware.logging import setup_logging
from dapp0.middleware.rate_limit import RateLimitMiddleware
from dapp0.middleware.request_id import RequestIdMiddleware


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register middleware. Starlette runs the last-added middleware outermost.

    CORS goes last so its headers also land on 429 responses.
    """
    setup_logging(settings)
    setup_error_handlers(app)
    app.add_middleware(
        RateLimitMiddleware,
        requests_per_window=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
        path_limits={"/api/generate": settings.generate_rate_limit_requests},
    )
    app.add_middleware(RequestIdMiddleware)
    setup_cors(app, settings)
