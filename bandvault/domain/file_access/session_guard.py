"""
Session Guard

Makes sure a live session backs every token issuance.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable

from ..errors import NoSessionError, SessionRefreshError
from .auth_gateway import AuthGateway
from .entities import Identity, utc_now

logger = logging.getLogger(__name__)

REFRESH_THRESHOLD = timedelta(seconds=60)


class SessionGuard:
    """
    Domain service validating the caller's session before issuance.

    The session is read from the gateway on every call and never cached,
    since it can expire or rotate between calls.
    """

    def __init__(
        self,
        auth_gateway: AuthGateway,
        refresh_threshold: timedelta = REFRESH_THRESHOLD,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize SessionGuard.

        Args:
            auth_gateway: Collaborator owning the session
            refresh_threshold: Remaining lifetime below which a refresh is attempted
            clock: Source of the current UTC time
        """
        self.auth_gateway = auth_gateway
        self.refresh_threshold = refresh_threshold
        self.clock = clock

    def ensure_valid_session(self) -> Identity:
        """
        Return the caller's identity, refreshing a session close to expiry.

        A failed refresh falls back to the existing identity, which may still
        be accepted for the immediate call.

        Returns:
            Identity of the signed-in caller

        Raises:
            NoSessionError: If there is no session at all
        """
        session = self.auth_gateway.get_session()
        if session is None:
            raise NoSessionError("No active session")

        remaining = session.seconds_until_expiry(self.clock())
        if remaining < self.refresh_threshold.total_seconds():
            logger.debug(
                f"Session for user {session.user_id} expires in {remaining:.0f}s, refreshing"
            )
            try:
                session = self.auth_gateway.refresh_session()
            except SessionRefreshError as e:
                logger.warning(
                    f"Session refresh failed, continuing with current session: {e}"
                )

        return Identity(user_id=session.user_id)
