"""
Redis connection used by the Redis snapshot store.

One lazily created client per process. When Redis is disabled or cannot
be reached, callers get None and fall back to another store.
"""

from typing import Optional

import redis.asyncio as redis

from train_booking.core.config import get_settings
from train_booking.core.logging import get_logger
from train_booking.core.metrics import redis_connection_errors

logger = get_logger(__name__)

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create the Redis connection. Returns None if Redis is disabled or down."""
    global _redis_client
    settings = get_settings()

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        client = redis.from_url(
            settings.REDIS_URL,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
        )
        try:
            await client.ping()
        except redis.RedisError as e:
            redis_connection_errors.inc()
            logger.error("redis_connection_failed", error=str(e))
            await client.aclose()
            return None
        logger.info("redis_connected", url=settings.REDIS_URL)
        _redis_client = client

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


async def get_redis_status() -> dict:
    """Connection summary for the health endpoint."""
    if not get_settings().REDIS_ENABLED:
        return {"status": "disabled"}
    if _redis_client is None:
        return {"status": "not_connected"}
    try:
        await _redis_client.ping()
    except redis.RedisError as e:
        return {"status": "error", "error": str(e)}
    return {"status": "connected"}
