"""Shared Redis client.

One connection pool per process, used for token revocation and rate
limiting.  Created lazily; closed from the app lifespan.
"""

from typing import Optional

import redis.asyncio as redis

from fastcfs.config import settings

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> redis.Redis:
    """Get or create Redis client connection."""
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
            max_connections=50,
        )
    return _redis_client


async def close_redis() -> None:
    """Close Redis connection (call on app shutdown)."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


async def ping_redis() -> bool:
    """True if Redis answers PING."""
    client = await get_redis()
    return bool(await client.ping())
