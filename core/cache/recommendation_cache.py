"""Recommendation Cache Service - Redis read-through cache for ranked results."""
import json
import logging
from typing import Optional, Dict, Any, List, Sequence
from datetime import datetime, timezone
from urllib.parse import urlparse

from redis import Redis

from core.recommender.models import RecommendationResult

logger = logging.getLogger(__name__)

# Opening hours change the ranking within minutes, so keep entries short-lived
CACHE_TTL_SECONDS = 5 * 60
KEY_PREFIX = "recommendation:"


def _sanitize_url(url: str) -> str:
    """Remove credentials from URL for safe logging."""
    try:
        parsed = urlparse(url)
        if parsed.password:
            sanitized = parsed._replace(
                netloc=f"{parsed.username or ''}:*@{parsed.hostname}:{parsed.port or 6379}"
            )
            return sanitized.geturl()
        return url
    except ValueError:
        return url


class RecommendationCacheService:
    """
    Service for caching recommendation lists per request fingerprint.

    Every operation degrades to a miss / failed write when Redis is down.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        password: Optional[str] = None,
        ttl_seconds: int = CACHE_TTL_SECONDS,
        key_prefix: str = KEY_PREFIX
    ):
        self.redis_url = redis_url
        self.password = password
        self.ttl_seconds = ttl_seconds
        self.key_prefix = key_prefix
        self._redis: Optional[Redis] = None
        self._available = False

        try:
            self._redis = Redis.from_url(
                redis_url,
                password=password,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )
            self._redis.ping()
            self._available = True
            logger.info(f"Recommendation cache connected to Redis at {_sanitize_url(redis_url)}")
        except Exception as e:
            logger.warning(f"Recommendation cache Redis unavailable: {e}")
            self._redis = None
            self._available = False

    @property
    def is_available(self) -> bool:
        """Check if cache is available."""
        if not self._available or not self._redis:
            return False
        try:
            return self._redis.ping()
        except Exception:
            return False

    def _make_key(self, fingerprint: str) -> str:
        return f"{self.key_prefix}{fingerprint}"

    def get(self, fingerprint: str) -> Optional[List[RecommendationResult]]:
        """Get cached results. Empty or unreadable entries count as a miss."""
        if not self.is_available:
            return None

        try:
            data = self._redis.get(self._make_key(fingerprint))
            if not data:
                logger.debug(f"Cache miss for {fingerprint}")
                return None

            cache_entry = json.loads(data)
            items = cache_entry.get("data") or []
            if not items:
                return None

            logger.debug(f"Cache hit for {fingerprint} ({len(items)} results)")
            return [RecommendationResult.model_validate(item) for item in items]

        except Exception as e:
            logger.warning(f"Error reading from recommendation cache: {e}")
            return None

    def set(
        self,
        fingerprint: str,
        value: Sequence[RecommendationResult],
        ttl_seconds: Optional[int] = None
    ) -> bool:
        """Cache results with TTL. Empty lists are not cached."""
        if not value or not self.is_available:
            return False

        try:
            ttl = ttl_seconds or self.ttl_seconds
            cache_entry = {
                "data": [result.model_dump(mode="json") for result in value],
                "cached_at": datetime.now(timezone.utc).isoformat(),
                "ttl_seconds": ttl
            }

            self._redis.setex(self._make_key(fingerprint), ttl, json.dumps(cache_entry, ensure_ascii=False))
            logger.debug(f"Cached {len(value)} recommendations for {fingerprint} (TTL: {ttl}s)")
            return True

        except Exception as e:
            logger.warning(f"Error writing to recommendation cache: {e}")
            return False

    def get_cache_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        if not self.is_available:
            return {"available": False}

        try:
            info = self._redis.info()
            key_count = 0
            cursor = 0
            while True:
                cursor, keys = self._redis.scan(cursor=cursor, match=f"{self.key_prefix}*", count=1000)
                key_count += len(keys)
                if cursor == 0:
                    break
            return {
                "available": True,
                "used_memory_human": info.get("used_memory_human", "unknown"),
                "recommendation_cache_keys": key_count,
                "ttl_seconds": self.ttl_seconds
            }
        except Exception as e:
            logger.warning(f"Error getting cache stats: {e}")
            return {"available": False, "error": str(e)}

    def clear_all(self) -> bool:
        """Clear all cached recommendations."""
        if not self.is_available:
            return False

        try:
            cursor = 0
            deleted = 0

            while True:
                cursor, keys = self._redis.scan(cursor=cursor, match=f"{self.key_prefix}*", count=100)
                if keys:
                    self._redis.delete(*keys)
                    deleted += len(keys)
                if cursor == 0:
                    break

            logger.info(f"Cleared {deleted} recommendation entries from cache")
            return True

        except Exception as e:
            logger.warning(f"Error clearing recommendation cache: {e}")
            return False


# Global instance for application use
_recommendation_cache: Optional[RecommendationCacheService] = None


def get_recommendation_cache() -> Optional[RecommendationCacheService]:
    """Get global recommendation cache instance."""
    return _recommendation_cache


def init_recommendation_cache(
    redis_url: str,
    password: Optional[str] = None,
    ttl_seconds: int = CACHE_TTL_SECONDS,
    key_prefix: str = KEY_PREFIX
) -> RecommendationCacheService:
    """Initialize global recommendation cache."""
    global _recommendation_cache
    _recommendation_cache = RecommendationCacheService(redis_url, password, ttl_seconds, key_prefix)
    return _recommendation_cache
