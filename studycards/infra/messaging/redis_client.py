"""
Redis client for the remote storage backend.
"""

from typing import Optional

import redis.asyncio as redis

from studycards.infra.config.logging_config import get_logger
from studycards.infra.config.settings import get_settings


def get_redis_client(redis_url: Optional[str] = None) -> redis.Redis:
    """Get a Redis client that returns decoded strings."""
    url = redis_url or get_settings().redis_url
    logger = get_logger("infra.redis")
    client = redis.from_url(url, decode_responses=True)
    logger.info("redis.client.get", url=url)
    return client
