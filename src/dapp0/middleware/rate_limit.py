"""Fixed-window rate limiting per client IP, with counters in Redis."""

import time
from typing import Any

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from dapp0.redis_client import get_redis

logger = structlog.get_logger()

_EXEMPT_PATHS = frozenset({"/health", "/ready"})


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Count requests per (IP, bucket, window) and answer 429 over the limit.

    ``path_limits`` maps a path prefix to its own, usually tighter, limit with a
    separate counter. Everything else shares the default bucket.
    """

    def __init__(
        self,
        app: Any,  # noqa: ANN401
        requests_per_window: int = 100,
        window_seconds: int = 60,
        path_limits: dict[str, int] | None = None,
    ) -> None:
        super().__init__(app)
        self.requests_per_window = requests_per_window
        self.window_seconds = window_seconds
        self.path_limits = path_limits or {}

    def _bucket(self, path: str) -> tuple[str, int]:
        for prefix, limit in self.path_limits.items():
            if path.startswith(prefix):
                return prefix, limit
        return "default", self.requests_per_window

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if path in _EXEMPT_PATHS or request.method == "OPTIONS":
            return await call_next(request)

        try:
            redis = get_redis()
        except RuntimeError:
            # Redis not initialized
            return await call_next(request)

        bucket, limit = self._bucket(path)
        client_ip = request.client.host if request.client else "unknown"
        window = int(time.time()) // self.window_seconds
        key = f"ratelimit:{bucket}:{client_ip}:{window}"

        pipe = redis.pipeline()
        pipe.incr(key)
        pipe.expire(key, self.window_seconds + 1)
        count, _ = await pipe.execute()

        if count > limit:
            logger.warning("rate_limit_exceeded", client_ip=client_ip, bucket=bucket, count=count)
            return JSONResponse(
                status_code=429,
                content={"detail": "Rate limit exceeded. Try again later."},
                headers={
                    "Retry-After": str(self.window_seconds - int(time.time()) % self.window_seconds),
                    "X-RateLimit-Limit": str(limit),
                    "X-RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(limit)
        response.headers["X-RateLimit-Remaining"] = str(max(0, limit - count))
        return response
