import logging
import redis.asyncio as redis
from app.core.config import REDIS_URL, REDIS_HEALTH_CHECK_S

logger = logging.getLogger("app.redis")


async def create_redis(url: str | None = REDIS_URL) -> redis.Redis | None:
    """Client for the audit stream, or None when no Redis is configured."""
    if not url:
        return None
    client = redis.from_url(
        url,
        encoding="utf-8",
        decode_responses=True,
        health_check_interval=REDIS_HEALTH_CHECK_S,
        retry_on_timeout=True,
        socket_keepalive=True
    )
    logger.info("Redis client created for %s", client.connection_pool.connection_kwargs.get("host"))
    return client


async def close_redis(client: redis.Redis | None) -> None:
    if client is not None:
        await client.aclose()
