"""
File Access Repositories

Repository interface for file access token persistence.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from .entities import FileAccessToken


class FileAccessTokenRepository(ABC):
    """Abstract repository interface for the token store."""

    @abstractmethod
    def save(self, token: FileAccessToken) -> bool:
        """
        Persist a single token.

        Returns:
            True if successful, False otherwise
        """
        pass

    @abstractmethod
    def save_batch(self, tokens: List[FileAccessToken]) -> bool:
        """
        Persist many tokens in one atomic write.

        Either every token is stored or none is.

        Returns:
            True if all tokens were stored, False otherwise
        """
        pass

    @abstractmethod
    def get(self, token: str) -> Optional[FileAccessToken]:
        """
        Retrieve a token record.

        Returns:
            FileAccessToken if found, None otherwise
        """
        pass

    @abstractmethod
    def claim(self, token: str, used_at: datetime) -> Optional[Tuple[bool, datetime]]:
        """
        Atomically mark a token as used if it is still unused.

        Args:
            token: Token value
            used_at: Time of use to record

        Returns:
            None if the token does not exist, otherwise a tuple of
            (claimed_now, effective_used_at). ``claimed_now`` is False when an
            earlier request already used the token, in which case
            ``effective_used_at`` is the time of that earlier use.
        """
        pass

    @abstractmethod
    def cleanup_expired(self, older_than: datetime) -> int:
        """
        Delete tokens that expired before ``older_than``.

        Returns:
            Number of tokens removed
        """
        pass
