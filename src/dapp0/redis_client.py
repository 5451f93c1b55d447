"""Redis connection pool.

Holds wallet login nonces, revoked session ids and rate-limit counters.
"""

import redis.asyncio as redis

_client: redis.Redis | None = None


async def init_redis(url: str) -> None:
    """Create the shared Redis client from a URL."""
    global _client  # noqa: PLW0603
    _client = redis.from_url(  # type: ignore[no-untyped-call]
        url,
        encoding="utf-8",
        decode_responses=True,
        max_connections=50,
    )


def use_redis(client: redis.Redis) -> None:
    """Install an already constructed client (e.g. an in-memory fake)."""
    global _client  # noqa: PLW0603
    _client = client


async def close_redis() -> None:
    """Close the shared Redis client."""
    global _client  # noqa: PLW0603
    if _client:
        await _client.aclose()
        _client = None


def get_redis() -> redis.Redis:
    """Get the Redis client (FastAPI dependency)."""
    if _client is None:
        msg = "Redis not initialized. Call init_redis() first."
        raise RuntimeError(msg)
    return _client
