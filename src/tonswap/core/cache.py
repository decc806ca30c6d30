"""JSON cache backed by Redis with an in-process fallback.

Used for market data pulled from third-party APIs. When Redis is unreachable at
startup (or fails later) the cache keeps working from process memory, so the
application never depends on Redis being up.
"""

import json
import logging
import time
from datetime import timedelta
from typing import Any

from redis import Redis
from redis.exceptions import RedisError

from tonswap.core.config import settings

logger = logging.getLogger(__name__)

# Cache expiration times based on data type
CACHE_EXPIRATION = {
    # Market listings move constantly, keep them short-lived
    "market_coins": timedelta(seconds=settings.MARKET_CACHE_TTL_SECONDS),
    # Default fallback
    "default": timedelta(hours=1),
}

CACHE_NAMESPACE = "tonswap"


def get_redis_connection() -> "Redis[Any] | None":
    """
    Get Redis connection for caching.

    Returns:
        Redis client instance or None if connection fails
    """
    try:
        redis_client: Redis[Any] = Redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=settings.REDIS_SOCKET_CONNECT_TIMEOUT,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        )
        redis_client.ping()
        logger.info(f"Successfully connected to Redis at {settings.REDIS_URL}")
        return redis_client
    except RedisError as e:
        logger.warning(f"Failed to connect to Redis: {e}. Using in-process cache.")
        return None
    except Exception as e:
        logger.error(f"Unexpected error connecting to Redis: {e}. Using in-process cache.")
        return None


class JSONCache:
    """Key/value cache storing JSON-serializable values with a TTL."""

    def __init__(self, redis_client: "Redis[Any] | None" = None) -> None:
        self._redis = redis_client
        self._memory: dict[str, tuple[float, str]] = {}

    @property
    def backend(self) -> str:
        return "redis" if self._redis is not None else "memory"

    def _key(self, key: str) -> str:
        return f"{CACHE_NAMESPACE}:{key}"

    def get(self, key: str) -> Any | None:
        """Return the cached value or None when missing or expired."""
        raw: str | None = None

        if self._redis is not None:
            try:
                raw = self._redis.get(self._key(key))
            except RedisError as e:
                logger.warning(f"Redis read failed for {key}: {e}")
        else:
            entry = self._memory.get(key)
            if entry is not None:
                expires_at, raw = entry
                if expires_at < time.monotonic():
                    del self._memory[key]
                    raw = None

        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        """Store a value for ``ttl`` (defaults to the default expiration)."""
        ttl = ttl or CACHE_EXPIRATION["default"]
        raw = json.dumps(value)

        if self._redis is not None:
            try:
                self._redis.set(self._key(key), raw, ex=int(ttl.total_seconds()))
                return
            except RedisError as e:
                logger.warning(f"Redis write failed for {key}: {e}")
                return

        self._memory[key] = (time.monotonic() + ttl.total_seconds(), raw)

    def clear(self) -> None:
        if self._redis is not None:
            try:
                keys = list(self._redis.scan_iter(match=f"{CACHE_NAMESPACE}:*"))
                if keys:
                    self._redis.delete(*keys)
            except RedisError as e:
                logger.warning(f"Redis clear failed: {e}")
        self._memory.clear()

    def stats(self) -> dict[str, Any]:
        stats: dict[str, Any] = {"enabled": True, "backend": self.backend}
        if self._redis is not None:
            try:
                stats["size"] = sum(1 for _ in self._redis.scan_iter(match=f"{CACHE_NAMESPACE}:*"))
            except RedisError:
                stats["size"] = "unavailable"
        else:
            stats["size"] = len(self._memory)
        return stats


_cache = JSONCache()


def configure_cache() -> None:
    """
    Switch the shared cache to Redis when it is reachable.

    Called once during app startup (in the lifespan context).
    """
    global _cache

    redis_conn = get_redis_connection()
    if redis_conn is None:
        logger.warning("Redis unavailable - market data cached in process memory")
        return

    _cache = JSONCache(redis_conn)
    logger.info(f"Configured Redis cache (market data TTL: {CACHE_EXPIRATION['market_coins']})")


def get_cache() -> JSONCache:
    return _cache


def clear_cache() -> None:
    _cache.clear()
    logger.info("Cleared cache")


def get_cache_stats() -> dict[str, Any]:
    """
    Get cache statistics.

    Returns:
        Dictionary with ``enabled``, ``backend`` and ``size`` keys
    """
    try:
        return _cache.stats()
    except Exception as e:
        logger.error(f"Failed to get cache stats: {e}")
        return {"enabled": False, "error": str(e)}
