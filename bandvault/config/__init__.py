"""
Configuration

Environment-driven settings for file access, Redis, Celery and Supabase.
"""

from .file_access_config import FileAccessConfig
from .redis_config import (
    RedisConfig,
    get_redis_client,
    get_redis_repository,
    init_redis,
    redis_health_check,
)
from .supabase_config import SupabaseConfig, create_auth_gateway

__all__ = [
    "FileAccessConfig",
    "RedisConfig",
    "SupabaseConfig",
    "create_auth_gateway",
    "get_redis_client",
    "get_redis_repository",
    "init_redis",
    "redis_health_check",
]
