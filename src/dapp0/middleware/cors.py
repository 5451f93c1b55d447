"""CORS configuration for the builder frontend."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dapp0.config import Settings


def setup_cors(app: FastAPI, settings: Settings) -> None:
    # Bearer tokens travel in the Authorization header, so credentials stay off.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-Id"],
        expose_headers=["X-Request-Id", "X-RateLimit-Limit", "X-RateLimit-Remaining", "Retry-After"],
    )
