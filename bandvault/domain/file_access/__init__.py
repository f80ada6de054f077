"""
File Access Domain

Handles file access tokens, session validation, URL construction and
tenant isolation for band files.
"""

from .auth_gateway import AuthGateway
from .entities import TOKEN_TTL, ChartRecord, FileAccessToken, Identity, Session
from .path_guard import PathGuard
from .repositories import FileAccessTokenRepository
from .session_guard import SessionGuard
from .token_issuer import TokenIssuer
from .url_builder import build_file_url
from .value_objects import ChartType, FileType, StoragePath

__all__ = [
    "AuthGateway",
    "ChartRecord",
    "ChartType",
    "FileAccessToken",
    "FileAccessTokenRepository",
    "FileType",
    "Identity",
    "PathGuard",
    "Session",
    "SessionGuard",
    "StoragePath",
    "TOKEN_TTL",
    "TokenIssuer",
    "build_file_url",
]
