"""Query Cache Service - Redis caching for search and match responses."""
import json
import logging
from typing import Any, Dict, Iterable, Optional
from datetime import datetime, timezone
from urllib.parse import urlparse

from redis import Redis
from redis.exceptions import RedisError

from core.utils import content_hash

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300
KEY_PREFIX = "query:"
TAG_PREFIX = "tag:"


def _sanitize_url(url: str) -> str:
    """Remove credentials from URL for safe logging."""
    parsed = urlparse(url)
    if parsed.password:
        sanitized = parsed._replace(
            netloc=f"{parsed.username or ''}:*@{parsed.hostname}:{parsed.port or 6379}"
        )
        return sanitized.geturl()
    return url


class QueryCacheService:
    """
    Cache for computed responses, keyed by a content hash of the request.

    Values are pure functions of their key, so concurrent writers may race
    and the last write wins. Entries expire after a TTL and can be dropped
    early by tag. The service is injected where needed; there is no global
    instance.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        password: Optional[str] = None,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        client: Optional[Redis] = None
    ):
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self._redis: Optional[Redis] = client
        self._available = False
        self._hits = 0
        self._misses = 0

        try:
            if self._redis is None:
                self._redis = Redis.from_url(
                    redis_url,
                    password=password,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_timeout=5
                )
            self._redis.ping()
            self._available = True
            logger.info(f"Query cache connected to Redis at {_sanitize_url(redis_url)}")
        except RedisError as e:
            logger.warning(f"Query cache Redis unavailable: {e}")
            self._available = False

    @property
    def is_available(self) -> bool:
        return self._available and self._redis is not None

    @staticmethod
    def make_key(namespace: str, payload: Any) -> str:
        """Deterministic key: namespace plus SHA256 of the canonical JSON payload."""
        return f"{KEY_PREFIX}{namespace}:{content_hash(payload)}"

    def get(self, key: str) -> Optional[Any]:
        """Cached value for key, or None on miss or error."""
        if not self.is_available:
            return None

        try:
            data = self._redis.get(key)
        except RedisError as e:
            logger.warning(f"Error reading from query cache: {e}")
            return None

        if not data:
            self._misses += 1
            logger.debug(f"Cache miss for {key[:32]}...")
            return None

        try:
            cache_entry = json.loads(data)
        except ValueError as e:
            logger.warning(f"Corrupt query cache entry {key[:32]}...: {e}")
            return None

        self._hits += 1
        logger.debug(f"Cache hit for {key[:32]}...")
        return cache_entry.get("data")

    def set(
        self,
        key: str,
        value: Any,
        tags: Iterable[str] = (),
        ttl_seconds: Optional[int] = None
    ) -> bool:
        """Store a JSON-serialisable value with TTL and register it under each tag."""
        if not self.is_available:
            return False

        ttl = ttl_seconds or self.ttl_seconds
        tags = list(tags)
        cache_entry = {
            "data": value,
            "cached_at": datetime.now(timezone.utc).isoformat(),
            "ttl_seconds": ttl
        }

        try:
            pipe = self._redis.pipeline()
            pipe.setex(key, ttl, json.dumps(cache_entry, default=str))
            for tag in tags:
                tag_key = f"{TAG_PREFIX}{tag}"
                pipe.sadd(tag_key, key)
                pipe.expire(tag_key, ttl)
            pipe.execute()
            logger.debug(f"Cached {key[:32]}... (TTL: {ttl}s, tags: {tags})")
            return True
        except RedisError as e:
            logger.warning(f"Error writing to query cache: {e}")
            return False

    def invalidate_tag(self, tag: str) -> int:
        """Delete every entry registered under tag. Returns the number of keys removed."""
        if not self.is_available:
            return 0

        tag_key = f"{TAG_PREFIX}{tag}"
        try:
            keys = list(self._redis.smembers(tag_key))
            deleted = self._redis.delete(*keys) if keys else 0
            self._redis.delete(tag_key)
            logger.info(f"Invalidated {deleted} cache entries for tag {tag!r}")
            return int(deleted)
        except RedisError as e:
            logger.warning(f"Error invalidating cache tag {tag!r}: {e}")
            return 0

    def get_cache_stats(self) -> Dict[str, Any]:
        if not self.is_available:
            return {"available": False}

        try:
            info = self._redis.info()
            key_count = 0
            cursor = 0
            while True:
                cursor, keys = self._redis.scan(cursor=cursor, match=f"{KEY_PREFIX}*", count=1000)
                key_count += len(keys)
                if cursor == 0:
                    break
            return {
                "available": True,
                "used_memory_human": info.get("used_memory_human", "unknown"),
                "query_cache_keys": key_count,
                "hits": self._hits,
                "misses": self._misses,
                "ttl_seconds": self.ttl_seconds
            }
        except RedisError as e:
            logger.warning(f"Error getting cache stats: {e}")
            return {"available": False, "error": str(e)}
