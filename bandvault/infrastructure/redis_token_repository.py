"""
Redis File Access Token Repository

Concrete Redis-based implementation of FileAccessTokenRepository.
Token records are JSON documents with a TTL covering their lifetime plus a
retention window, indexed by expiry in a sorted set for housekeeping.
"""

import logging
import os
from datetime import datetime
from typing import List, Optional, Tuple

from redis.exceptions import RedisError

from ..domain.file_access.entities import FileAccessToken, utc_now
from ..domain.file_access.repositories import FileAccessTokenRepository

logger = logging.getLogger(__name__)

# Marks the token used only if no earlier request did; returns {claimed, used_at}
CLAIM_TOKEN_SCRIPT = """
local data = redis.call('GET', KEYS[1])
if not data then
    return nil
end

local record = cjson.decode(data)
local used_at = record['used_at']
if used_at ~= nil and used_at ~= cjson.null then
    return {0, used_at}
end

record['used_at'] = ARGV[1]
redis.call('SET', KEYS[1], cjson.encode(record), 'KEEPTTL')
return {1, ARGV[1]}
"""


class RedisFileAccessTokenRepository(FileAccessTokenRepository):
    """
    Redis-based implementation of FileAccessTokenRepository.

    Batch inserts run in a single MULTI/EXEC transaction.
    """

    def __init__(self, redis_repository, retention_seconds: Optional[int] = None):
        """
        Initialize with Redis repository.

        Args:
            redis_repository: RedisRepository instance from infrastructure layer
            retention_seconds: How long records outlive their expiry
        """
        self.redis_repo = redis_repository
        self.token_prefix = "file_access_token"
        self.expiry_index = "file_access_tokens:expiry"
        if retention_seconds is None:
            retention_seconds = int(os.getenv("TOKEN_RETENTION_SECONDS", 3600))
        self.retention_seconds = retention_seconds

    def _token_key(self, token: str) -> str:
        return f"{self.token_prefix}:{token}"

    def _ttl_for(self, tokens: List[FileAccessToken]) -> int:
        latest = max(t.expires_at for t in tokens)
        remaining = int((latest - utc_now()).total_seconds())
        return max(1, remaining) + self.retention_seconds

    def save(self, token: FileAccessToken) -> bool:
        """Save a single token record."""
        return self.save_batch([token])

    def save_batch(self, tokens: List[FileAccessToken]) -> bool:
        """Save all token records atomically in one round trip."""
        if not tokens:
            return True

        items = {self._token_key(t.token): t.to_dict() for t in tokens}
        scores = {t.token: t.expires_at.timestamp() for t in tokens}
        return self.redis_repo.set_json_many(
            items,
            ttl=self._ttl_for(tokens),
            index_key=self.expiry_index,
            index_scores=scores,
        )

    def get(self, token: str) -> Optional[FileAccessToken]:
        """Retrieve a token record."""
        data = self.redis_repo.get_json(self._token_key(token))
        if data is None:
            return None

        try:
            return FileAccessToken.from_dict(data)
        except (KeyError, ValueError) as e:
            logger.error(f"Error deserializing token record {token[:8]}: {e}")
            return None

    def claim(self, token: str, used_at: datetime) -> Optional[Tuple[bool, datetime]]:
        """Atomically record the first use of a token."""
        result = self.redis_repo.run_script(
            CLAIM_TOKEN_SCRIPT, [self._token_key(token)], [used_at.isoformat()]
        )
        if result is None:
            return None

        claimed, effective = result
        if isinstance(effective, bytes):
            effective = effective.decode("utf-8")
        return bool(int(claimed)), datetime.fromisoformat(effective)

    def cleanup_expired(self, older_than: datetime) -> int:
        """Delete token records whose expiry is before ``older_than``."""
        redis_client = self.redis_repo.redis
        index_key = self.redis_repo._make_key(self.expiry_index)

        try:
            members = redis_client.zrangebyscore(index_key, "-inf", older_than.timestamp())
            if not members:
                return 0

            tokens = [m.decode("utf-8") if isinstance(m, bytes) else m for m in members]
            pipeline = redis_client.pipeline(transaction=True)
            pipeline.delete(
                *[self.redis_repo._make_key(self._token_key(t)) for t in tokens]
            )
            pipeline.zrem(index_key, *tokens)
            pipeline.execute()
            return len(tokens)
        except RedisError as e:
            logger.error(f"Error cleaning up expired file access tokens: {e}")
            raise
