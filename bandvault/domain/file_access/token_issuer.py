"""
Token Issuer

Creates and persists short-lived file access tokens.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, Iterable

from ..errors import InvalidFileAccessTokenError, TokenIssueError
from .entities import TOKEN_TTL, FileAccessToken, Identity, utc_now
from .repositories import FileAccessTokenRepository

logger = logging.getLogger(__name__)


class TokenIssuer:
    """
    Domain service issuing file access tokens.

    Single and batch issuance share one policy: a random UUID4 token that
    expires ``ttl`` after issuance. Callers pass an Identity obtained from
    SessionGuard so issuance never runs on an unchecked session.
    """

    def __init__(
        self,
        token_repository: FileAccessTokenRepository,
        ttl: timedelta = TOKEN_TTL,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.token_repo = token_repository
        self.ttl = ttl
        self.clock = clock

    def issue_one(
        self, storage_path: str, identity: Identity, band_id: str
    ) -> FileAccessToken:
        """
        Issue a token for one object with a single insert.

        Args:
            storage_path: Object-store key to authorize
            identity: Validated caller identity
            band_id: Band owning the object

        Returns:
            The persisted FileAccessToken

        Raises:
            InvalidFileAccessTokenError: If the path does not belong to band_id
            TokenIssueError: If the token could not be stored
        """
        token = FileAccessToken.create(
            storage_path, identity.user_id, band_id, now=self.clock(), ttl=self.ttl
        )

        try:
            saved = self.token_repo.save(token)
        except Exception as e:
            raise TokenIssueError(
                f"Failed to store file access token: {e}", original_error=e
            ) from e

        if not saved:
            raise TokenIssueError("Failed to store file access token")

        return token

    def issue_batch(
        self, storage_paths: Iterable[str], identity: Identity, band_id: str
    ) -> Dict[str, FileAccessToken]:
        """
        Issue one token per distinct path with a single multi-row insert.

        All or nothing: when the insert fails, or any path is refused, the
        result is an empty dict. Callers must treat an empty result for a
        non-empty request as a total failure.

        Args:
            storage_paths: Object-store keys to authorize
            identity: Validated caller identity
            band_id: Band owning the objects

        Returns:
            Mapping of storage path to its token
        """
        paths = list(dict.fromkeys(storage_paths))
        if not paths:
            return {}

        now = self.clock()
        try:
            tokens = {
                path: FileAccessToken.create(
                    path, identity.user_id, band_id, now=now, ttl=self.ttl
                )
                for path in paths
            }
        except InvalidFileAccessTokenError as e:
            logger.debug(f"Refusing token batch for band {band_id}: {e}")
            return {}

        try:
            saved = self.token_repo.save_batch(list(tokens.values()))
        except Exception as e:
            logger.debug(f"Token batch insert raised for {len(paths)} paths: {e}")
            return {}

        if not saved:
            return {}

        logger.debug(f"Issued {len(tokens)} file access tokens for band {band_id}")
        return tokens
