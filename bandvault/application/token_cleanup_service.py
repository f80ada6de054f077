"""
Token Cleanup Service

Deletes file access token records that expired more than the retention
window ago. Shared by the Celery beat task and the cleanup endpoint.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from ..domain.file_access.entities import utc_now
from ..domain.file_access.repositories import FileAccessTokenRepository

logger = logging.getLogger(__name__)

TOKEN_RETENTION = timedelta(hours=1)


@dataclass(frozen=True)
class CleanupResult:
    deleted_count: int
    timestamp: datetime

    def to_dict(self):
        return {
            "success": True,
            "deletedCount": self.deleted_count,
            "timestamp": self.timestamp.isoformat(),
        }


class TokenCleanupService:
    """Removes stale token records from the token store."""

    def __init__(
        self,
        token_repository: FileAccessTokenRepository,
        retention: timedelta = TOKEN_RETENTION,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.token_repo = token_repository
        self.retention = retention
        self.clock = clock

    def cleanup(self) -> CleanupResult:
        """
        Delete records whose expiry is older than now minus the retention.

        Raises:
            RedisError: If the token store fails
        """
        now = self.clock()
        deleted = self.token_repo.cleanup_expired(now - self.retention)
        logger.info(f"Cleaned up {deleted} expired file access tokens")
        return CleanupResult(deleted_count=deleted, timestamp=now)
