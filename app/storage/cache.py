import json
import hashlib
import logging
from typing import Dict, Optional

import redis

from app.config.settings import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


class AllocationCache:
    """Redis cache for allocation responses. Redis errors count as misses."""

    def __init__(self, redis_url: str = settings.redis_url, ttl_seconds: int = settings.cache_ttl_seconds):
        self.redis_client = redis.from_url(redis_url, decode_responses=True)
        self.ttl_seconds = ttl_seconds

    def get(self, request_hash: str) -> Optional[Dict]:
        """Retrieve cached allocation by request hash."""
        try:
            cached = self.redis_client.get(f"allocation:{request_hash}")
        except redis.RedisError as exc:
            logger.warning(f"Cache read failed: {exc}")
            return None
        if not cached:
            return None
        try:
            return json.loads(cached)
        except ValueError as exc:
            logger.warning(f"Discarding unreadable cache entry: {exc}")
            return None

    def set(self, request_hash: str, response: Dict) -> None:
        try:
            self.redis_client.setex(
                f"allocation:{request_hash}",
                self.ttl_seconds,
                json.dumps(response, default=str)
            )
        except redis.RedisError as exc:
            logger.warning(f"Cache write failed: {exc}")

    @staticmethod
    def hash_request(payload: Dict) -> str:
        """Generate hash from a JSON-serializable request."""
        data = json.dumps(payload, sort_keys=True, default=str)
        return hashlib.sha256(data.encode()).hexdigest()[:16]
