"""
Infrastructure Layer

Redis token store, Supabase auth gateway and object-store adapters.
"""

from .local_file_storage_repository import LocalFileStorageRepository
from .redis_repository import RedisConnectionManager, RedisRepository
from .redis_token_repository import RedisFileAccessTokenRepository
from .storage_factory import StorageFactory
from .supabase_auth_gateway import SupabaseAuthGateway

__all__ = [
    "LocalFileStorageRepository",
    "RedisConnectionManager",
    "RedisFileAccessTokenRepository",
    "RedisRepository",
    "StorageFactory",
    "SupabaseAuthGateway",
]
