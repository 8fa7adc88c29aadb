"""
Redis client - search response cache.
Challenge: Connection pooling, fail gracefully when Redis is down.
Design: Single client instance; the cache is optional for every caller.
"""

import hashlib
import json
import logging
from typing import Any
from urllib.parse import urlencode

from redis.asyncio import Redis

from app.config import get_settings
from app.schemas.search import QueryParameters
from app.services.query_arguments import query_pairs

logger = logging.getLogger(__name__)

settings = get_settings()

SEARCH_CACHE_PREFIX = "search:"

# Shared async Redis client (connection pool managed by redis-py)
_redis: Redis | None = None


async def get_redis() -> Redis:
    global _redis
    if _redis is None:
        _redis = Redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis


def search_cache_key(parameters: QueryParameters) -> str:
    """
    Stable key for a parameter set. Key order doesn't matter; a list value is
    keyed as 'key[]' because list and string inputs coerce differently. Values
    keep their order (fields order shapes the response).
    """
    normalized = urlencode(sorted(query_pairs(parameters), key=lambda pair: pair[0]))
    return SEARCH_CACHE_PREFIX + hashlib.sha256(normalized.encode("utf-8")).hexdigest()


async def cache_get(key: str) -> str | None:
    """Get value from cache. Returns None if miss or error (graceful degradation)."""
    try:
        client = await get_redis()
        return await client.get(key)
    except Exception as e:
        logger.debug("cache_get failed for %s: %s", key, e)
        return None


async def cache_set(key: str, value: str | dict[str, Any], ttl_seconds: int = 300) -> bool:
    """Set value in cache with TTL. Dict is JSON-serialized."""
    try:
        client = await get_redis()
        if isinstance(value, dict):
            value = json.dumps(value)
        await client.setex(key, ttl_seconds, value)
        return True
    except Exception as e:
        logger.debug("cache_set failed for %s: %s", key, e)
        return False


class SearchResponseCache:
    """Caches successful search envelopes by request parameters."""

    def __init__(self, ttl_seconds: int):
        self.ttl_seconds = ttl_seconds

    async def get(self, parameters: QueryParameters) -> dict[str, Any] | None:
        cached = await cache_get(search_cache_key(parameters))
        return json.loads(cached) if cached else None

    async def set(self, parameters: QueryParameters, body: dict[str, Any]) -> bool:
        return await cache_set(search_cache_key(parameters), body, self.ttl_seconds)
