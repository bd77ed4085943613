"""
Cache Utility Module
Provides read-through caching using Redis (primary) or in-memory cache (fallback)

Analytics results are cached as JSON-ready dicts keyed by the resolved date
range, so both backends store exactly what the API returns.
"""

import redis
import json
import logging
from typing import Any, Callable, Dict, Optional, Union
from datetime import timedelta
from cachetools import TTLCache
import threading

from config.settings import settings

logger = logging.getLogger(__name__)


def _ttl_seconds(ttl: Optional[Union[int, timedelta]]) -> Optional[int]:
    if isinstance(ttl, timedelta):
        return int(ttl.total_seconds())
    return ttl


class InMemoryCache:
    """
    In-memory cache fallback using cachetools (TTL-based LRU cache)
    Thread-safe and suitable for single-server deployments
    """

    def __init__(self, maxsize=10000, ttl=300):
        """
        Initialize in-memory cache

        Args:
            maxsize: Maximum number of items to cache (default: 10000)
            ttl: Time-to-live in seconds for every entry (default: 300)
        """
        self.cache = TTLCache(maxsize=maxsize, ttl=ttl)
        self.lock = threading.RLock()
        self._key_locks: Dict[str, threading.Lock] = {}
        self.enabled = True
        logger.info(f"✓ In-memory cache initialized (maxsize={maxsize}, default_ttl={ttl}s)")

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        with self.lock:
            return self.cache.get(key)

    def set(self, key: str, value: Any, ttl: Optional[Union[int, timedelta]] = None) -> bool:
        """
        Set value in cache
        Note: cachetools TTLCache uses global TTL, so custom TTL per key is not supported
        """
        with self.lock:
            self.cache[key] = value
            return True

    def clear_pattern(self, pattern: str) -> int:
        """Delete all keys matching a pattern (simplified for in-memory)"""
        with self.lock:
            # Simple pattern matching (starts with)
            prefix = pattern.rstrip('*')
            keys_to_delete = [k for k in self.cache.keys() if k.startswith(prefix)]
            for key in keys_to_delete:
                del self.cache[key]
            return len(keys_to_delete)

    def get_or_compute(
        self,
        key: str,
        compute: Callable[[], Any],
        ttl: Optional[Union[int, timedelta]] = None,
    ) -> Any:
        """
        Return the cached value or compute and store it.

        Concurrent callers for the same key wait on a per-key lock, so the
        value is computed once per expiry.
        """
        value = self.get(key)
        if value is not None:
            logger.debug(f"Cache HIT for {key}")
            return value

        with self.lock:
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        try:
            with key_lock:
                value = self.get(key)
                if value is not None:
                    logger.debug(f"Cache HIT for {key} after wait")
                    return value

                logger.debug(f"Cache MISS for {key}")
                value = compute()
                self.set(key, value, ttl)
                return value
        finally:
            with self.lock:
                self._key_locks.pop(key, None)

    def ping(self) -> bool:
        """Check if cache is available"""
        return self.enabled


class RedisCache:
    """Redis cache manager with connection pooling and error handling"""

    def __init__(self, host='localhost', port=6379, db=0, password=None, default_ttl=300):
        """
        Initialize Redis connection with connection pooling

        Args:
            host: Redis host (default: localhost)
            port: Redis port (default: 6379)
            db: Redis database number (default: 0)
            password: Redis password (optional)
            default_ttl: TTL in seconds when a caller does not pass one
        """
        self.default_ttl = default_ttl
        try:
            self.pool = redis.ConnectionPool(
                host=host,
                port=port,
                db=db,
                password=password,
                decode_responses=True,
                max_connections=50,
                socket_keepalive=True,
                socket_timeout=5,
                retry_on_timeout=True
            )
            self.client = redis.Redis(connection_pool=self.pool)
            # Test connection
            self.client.ping()
            self.enabled = True
            logger.info(f"✓ Redis connected successfully at {host}:{port}")
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning(f"⚠️  Redis connection failed: {e}. Falling back to in-memory cache.")
            self.enabled = False
            self.client = None

    def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache

        Returns:
            Cached value or None if not found/error
        """
        if not self.enabled:
            return None

        try:
            value = self.client.get(key)
        except redis.RedisError as e:
            logger.error(f"Redis GET error for key '{key}': {e}")
            return None
        if value is None:
            return None

        try:
            return json.loads(value)
        except (json.JSONDecodeError, TypeError) as e:
            logger.error(f"Discarding undecodable cache entry '{key}': {e}")
            return None

    def set(self, key: str, value: Any, ttl: Optional[Union[int, timedelta]] = None) -> bool:
        """
        Set value in cache with optional TTL

        Args:
            key: Cache key
            value: JSON-serializable value
            ttl: Time to live in seconds or timedelta object

        Returns:
            True if successful, False otherwise
        """
        if not self.enabled:
            return False

        ttl = _ttl_seconds(ttl) or self.default_ttl
        try:
            return bool(self.client.setex(key, ttl, json.dumps(value)))
        except (TypeError, ValueError) as e:
            logger.error(f"Value for key '{key}' is not JSON serializable: {e}")
            return False
        except redis.RedisError as e:
            logger.error(f"Redis SET error for key '{key}': {e}")
            return False

    def clear_pattern(self, pattern: str) -> int:
        """
        Delete all keys matching a pattern

        Args:
            pattern: Redis pattern (e.g., "analytics:*")

        Returns:
            Number of keys deleted
        """
        if not self.enabled:
            return 0

        try:
            keys = list(self.client.scan_iter(match=pattern))
            if keys:
                return self.client.delete(*keys)
            return 0
        except redis.RedisError as e:
            logger.error(f"Redis CLEAR_PATTERN error for pattern '{pattern}': {e}")
            return 0

    def get_or_compute(
        self,
        key: str,
        compute: Callable[[], Any],
        ttl: Optional[Union[int, timedelta]] = None,
    ) -> Any:
        """Read-through lookup; Redis failures fall back to computing directly."""
        value = self.get(key)
        if value is not None:
            logger.debug(f"Cache HIT for {key}")
            return value

        logger.debug(f"Cache MISS for {key}")
        value = compute()
        self.set(key, value, ttl)
        return value

    def ping(self) -> bool:
        """Check if Redis is available"""
        if not self.enabled:
            return False

        try:
            return self.client.ping()
        except redis.RedisError as e:
            logger.error(f"Redis PING error: {e}")
            return False


class NullCache:
    """Pass-through used when caching is switched off in settings."""

    enabled = False

    def get_or_compute(self, key: str, compute: Callable[[], Any], ttl=None) -> Any:
        return compute()

    def clear_pattern(self, pattern: str) -> int:
        return 0

    def ping(self) -> bool:
        return False


# Global cache instance
cache = None


def init_cache(host=None, port=None, db=None, password=None, fallback=True):
    """
    Initialize global cache instance with automatic fallback

    Args:
        host: Redis host (defaults to settings.REDIS_HOST)
        port: Redis port
        db: Redis database number
        password: Redis password
        fallback: Use in-memory cache if Redis fails (default: True)

    Returns:
        Cache instance (Redis, InMemory or Null)
    """
    global cache

    if not settings.CACHE_ENABLED:
        cache = NullCache()
        logger.info("Caching disabled by configuration")
        return cache

    redis_cache = RedisCache(
        host=host or settings.REDIS_HOST,
        port=port or settings.REDIS_PORT,
        db=settings.REDIS_DB if db is None else db,
        password=password or settings.REDIS_PASSWORD,
        default_ttl=settings.CACHE_TTL_SECONDS,
    )

    if redis_cache.enabled:
        cache = redis_cache
        logger.info("✓ Using Redis cache")
    elif fallback:
        cache = InMemoryCache(maxsize=settings.CACHE_MAXSIZE, ttl=settings.CACHE_TTL_SECONDS)
        logger.info("✓ Using in-memory cache fallback")
    else:
        cache = NullCache()
        logger.warning("⚠️  No cache available")

    return cache


def get_cache() -> Union[RedisCache, InMemoryCache, NullCache]:
    """Get global cache instance"""
    global cache
    if cache is None:
        cache = init_cache(fallback=True)
    return cache


class CacheKeys:
    """Standardized cache key patterns"""

    PREFIX = "analytics:*"
    SUMMARY_ALL = "analytics:summary:all"
    SUMMARY_RANGE = "analytics:summary:{range}"
    DAILY = "analytics:daily:{range}"
    HOURLY = "analytics:hourly:{range}"
    PAYMENT_METHODS = "analytics:payment-methods:{range}"

    @staticmethod
    def format(pattern: str, **kwargs) -> str:
        """Format a cache key pattern with values"""
        return pattern.format(**kwargs)


def invalidate_analytics() -> int:
    """Drop every cached analytics view (e.g. after a backfill)."""
    deleted = get_cache().clear_pattern(CacheKeys.PREFIX)
    logger.info(f"Invalidated {deleted} cached analytics entries")
    return deleted
