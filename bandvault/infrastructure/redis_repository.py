"""
Redis Repository Base Class

Provides JSON storage, atomic multi-key transactions and Lua script
execution on top of a pooled Redis connection.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class RedisRepository:
    """Base Redis repository with prefixed keys and atomic operations."""

    def __init__(self, redis_client: redis.Redis, key_prefix: str = ""):
        self.redis = redis_client
        self.key_prefix = key_prefix

    def _make_key(self, key: str) -> str:
        """Create a prefixed key for Redis storage."""
        return f"{self.key_prefix}:{key}" if self.key_prefix else key

    def get_json(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Get JSON data from Redis.

        Returns:
            Dictionary if found and valid JSON, None otherwise
        """
        try:
            data = self.redis.get(self._make_key(key))
            if data is None:
                return None
            if isinstance(data, bytes):
                data = data.decode("utf-8")
            return json.loads(data)
        except (RedisError, json.JSONDecodeError) as e:
            logger.error(f"Error getting JSON data for key {key}: {e}")
            return None

    def set_json_many(
        self,
        items: Dict[str, Dict[str, Any]],
        ttl: int,
        index_key: Optional[str] = None,
        index_scores: Optional[Dict[str, float]] = None,
    ) -> bool:
        """
        Atomically store several JSON documents in one round trip.

        Uses a MULTI/EXEC pipeline so either every document is written or
        none is. Optionally adds each key to a sorted-set index.

        Args:
            items: Mapping of key to document
            ttl: Time to live in seconds for every document
            index_key: Optional sorted set receiving the keys
            index_scores: Score per key for the index

        Returns:
            True if the transaction committed, False otherwise
        """
        if not items:
            return True

        try:
            pipeline = self.redis.pipeline(transaction=True)
            for key, data in items.items():
                pipeline.setex(self._make_key(key), ttl, json.dumps(data))
            if index_key and index_scores:
                pipeline.zadd(self._make_key(index_key), index_scores)
            results = pipeline.execute()
            return all(results[: len(items)])
        except (RedisError, TypeError) as e:
            logger.debug(f"Atomic batch write of {len(items)} keys failed: {e}")
            return False

    def run_script(self, script: str, keys: List[str], args: List[Any]) -> Any:
        """
        Execute a Lua script atomically on prefixed keys.

        Raises:
            RedisError: If the script fails
        """
        redis_keys = [self._make_key(key) for key in keys]
        return self.redis.eval(script, len(redis_keys), *redis_keys, *args)


class RedisConnectionManager:
    """Manages Redis connection with connection pooling."""

    def __init__(self, host: str = 'localhost', port: int = 6379, db: int = 0,
                 password: Optional[str] = None, max_connections: int = 20,
                 decode_responses: bool = False):
        self.connection_pool = redis.ConnectionPool(
            host=host,
            port=port,
            db=db,
            password=password,
            max_connections=max_connections,
            decode_responses=decode_responses,
            retry_on_timeout=True,
            socket_keepalive=True,
        )
        self._client = None

    @property
    def client(self) -> redis.Redis:
        """Get Redis client instance with connection pooling."""
        if self._client is None:
            self._client = redis.Redis(connection_pool=self.connection_pool)
        return self._client

    def health_check(self) -> bool:
        """Check if Redis connection is healthy."""
        try:
            return bool(self.client.ping())
        except RedisConnectionError:
            return False
