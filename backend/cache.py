"""
Redis client helper.

One `redis.Redis` client is shared per process. `redis.from_url` does not
connect until the first command, so importing this module is cheap; the
client keeps its own connection pool and is safe to use from the worker
threads FastAPI runs sync routes in.
"""

import logging

import redis

from settings import settings

logger = logging.getLogger(__name__)

_client = redis.from_url(settings.redis_url, decode_responses=True)


def get_redis() -> redis.Redis:
    return _client


def close_redis() -> None:
    logger.info("Closing redis client")
    _client.close()
