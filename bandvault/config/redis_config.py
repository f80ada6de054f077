"""
Redis Configuration

Connection settings for the token store and the module-level connection
manager shared by the app and Celery workers.
"""

import os
from typing import Optional

import redis

from ..infrastructure.redis_repository import RedisConnectionManager, RedisRepository


class RedisConfig:
    """Redis connection settings."""

    def __init__(self):
        self.host = os.getenv("REDIS_HOST", "localhost")
        self.port = int(os.getenv("REDIS_PORT", 6379))
        self.db = int(os.getenv("REDIS_DB", 0))
        self.password = os.getenv("REDIS_PASSWORD")
        self.max_connections = int(os.getenv("REDIS_MAX_CONNECTIONS", 20))

        # redis://[:password@]host:port/db overrides the individual settings
        self.url = os.getenv("REDIS_URL")
        if self.url:
            params = redis.connection.parse_url(self.url)
            self.host = params.get("host", self.host)
            self.port = params.get("port", self.port)
            self.db = params.get("db", self.db)
            self.password = params.get("password", self.password)


_redis_manager: Optional[RedisConnectionManager] = None


def init_redis(config: Optional[RedisConfig] = None) -> RedisConnectionManager:
    """Create the shared connection manager."""
    global _redis_manager

    if config is None:
        config = RedisConfig()

    _redis_manager = RedisConnectionManager(
        host=config.host,
        port=config.port,
        db=config.db,
        password=config.password or None,
        max_connections=config.max_connections,
    )
    return _redis_manager


def get_redis_client() -> redis.Redis:
    """
    Get the shared Redis client.

    Raises:
        RuntimeError: If init_redis() has not run
    """
    if _redis_manager is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")

    return _redis_manager.client


def get_redis_repository(key_prefix: str = "") -> RedisRepository:
    return RedisRepository(get_redis_client(), key_prefix)


def redis_health_check() -> bool:
    if _redis_manager is None:
        return False

    return _redis_manager.health_check()
