import logging

import redis

from taskboard.config import settings

logger = logging.getLogger(__name__)

# timeouts bound the latency of the limiter and /ready when redis is down
redis_client = redis.Redis.from_url(
    settings.redis_url,
    decode_responses=True,
    socket_connect_timeout=settings.redis_socket_timeout,
    socket_timeout=settings.redis_socket_timeout,
)

def redis_ping() -> bool:
    try:
        return bool(redis_client.ping())
    except redis.RedisError as e:
        logger.warning("redis ping failed: %s", e.__class__.__name__)
        return False
