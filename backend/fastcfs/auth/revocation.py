"""JWT token revocation using a Redis blacklist.

Logout blacklists the presented token until its natural expiry.
Revoking every token of a user (e.g. after deactivation) sets a per-user
flag that get_current_user checks on each request.
"""

import logging
import time

import redis.asyncio as redis

from fastcfs.utils.cache import get_redis

logger = logging.getLogger(__name__)


class TokenRevocation:
    """Manage JWT token revocation with Redis."""

    @staticmethod
    async def revoke_token(token: str, expires_at: float) -> bool:
        """Add token to revocation list.

        Args:
            token: JWT token to revoke
            expires_at: Unix timestamp when token naturally expires

        Returns:
            True if successfully revoked
        """
        ttl = int(expires_at - time.time())
        if ttl <= 0:
            # Already expired
            return True

        redis_client = await get_redis()
        try:
            await redis_client.setex(f"revoked:{token}", ttl, str(int(time.time())))
            return True
        except redis.RedisError as e:
            logger.error("Failed to revoke token: %s", e)
            return False

    @staticmethod
    async def is_revoked(token: str) -> bool:
        """Check if token is revoked.  Fails closed when Redis is down."""
        redis_client = await get_redis()
        try:
            return await redis_client.exists(f"revoked:{token}") > 0
        except redis.RedisError as e:
            logger.error("Failed to check token revocation: %s", e)
            return True

    @staticmethod
    async def revoke_all_user_tokens(user_id: int | str, duration: int = 86400) -> bool:
        """Revoke all tokens for a user for `duration` seconds."""
        redis_client = await get_redis()
        try:
            await redis_client.setex(
                f"revoked:user:{user_id}", duration, str(int(time.time()))
            )
            return True
        except redis.RedisError as e:
            logger.error("Failed to revoke user tokens: %s", e)
            return False

    @staticmethod
    async def is_user_revoked(user_id: int | str) -> bool:
        """Check if all tokens for a user are revoked.  Fails closed."""
        redis_client = await get_redis()
        try:
            return await redis_client.exists(f"revoked:user:{user_id}") > 0
        except redis.RedisError as e:
            logger.error("Failed to check user revocation: %s", e)
            return True
