"""
Auth Gateway Interface

Contract for the external authentication collaborator that owns the
caller's session. The file access subsystem only reads the session and may
ask for it to be refreshed.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .entities import Session


class AuthGateway(ABC):
    """Abstract access to the caller's authentication session."""

    @abstractmethod
    def get_session(self) -> Optional[Session]:
        """
        Return the current session.

        Returns:
            Session if the caller is signed in, None otherwise
        """
        pass

    @abstractmethod
    def refresh_session(self) -> Session:
        """
        Exchange the current refresh token for a new session.

        Returns:
            The new session, which also becomes the current one

        Raises:
            SessionRefreshError: If the provider rejects the refresh
        """
        pass
