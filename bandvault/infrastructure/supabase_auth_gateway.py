"""
Supabase Auth Gateway

AuthGateway implementation backed by the Supabase GoTrue HTTP API.
Holds one user's session in memory, the way the Supabase client SDKs do,
and rotates it through the refresh-token grant.
"""

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import httpx

from ..domain.errors import SessionRefreshError
from ..domain.file_access.auth_gateway import AuthGateway
from ..domain.file_access.entities import Session, utc_now

logger = logging.getLogger(__name__)


class SupabaseAuthGateway(AuthGateway):
    """
    Session holder for a single signed-in user.

    The initial session comes from the login flow through ``set_session``.
    """

    def __init__(
        self,
        supabase_url: str,
        anon_key: str,
        http_client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        """
        Initialize gateway.

        Args:
            supabase_url: Project URL, e.g. https://xyz.supabase.co
            anon_key: Public API key sent as the ``apikey`` header
            http_client: Optional preconfigured httpx client
            timeout: Request timeout in seconds
        """
        self.token_url = f"{supabase_url.rstrip('/')}/auth/v1/token"
        self.anon_key = anon_key
        self.http_client = http_client or httpx.Client(timeout=timeout)
        self._session: Optional[Session] = None
        self._lock = threading.Lock()
        self._refresh_lock = threading.Lock()

    def set_session(self, session: Optional[Session]) -> None:
        with self._lock:
            self._session = session

    def get_session(self) -> Optional[Session]:
        with self._lock:
            return self._session

    def refresh_session(self) -> Session:
        """
        Rotate the session through the refresh-token grant.

        Refreshes are serialized. A caller that waited on another thread's
        refresh gets the rotated session instead of replaying the spent
        refresh token.
        """
        observed = self.get_session()
        with self._refresh_lock:
            current = self.get_session()
            if current is None:
                raise SessionRefreshError("No session to refresh")
            if current is not observed:
                return current
            return self._request_refresh(current)

    def _request_refresh(self, current: Session) -> Session:
        try:
            response = self.http_client.post(
                self.token_url,
                params={"grant_type": "refresh_token"},
                headers={"apikey": self.anon_key},
                json={"refresh_token": current.refresh_token},
            )
            response.raise_for_status()
            session = self._parse_session(response.json())
        except httpx.HTTPStatusError as e:
            raise SessionRefreshError(
                f"Auth provider rejected refresh ({e.response.status_code})",
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            raise SessionRefreshError(f"Auth provider unreachable: {e}", original_error=e) from e
        except (KeyError, TypeError, ValueError) as e:
            raise SessionRefreshError(f"Malformed refresh response: {e}", original_error=e) from e

        self.set_session(session)
        logger.info(f"Session refreshed for user {session.user_id}")
        return session

    @staticmethod
    def _parse_session(payload: Dict[str, Any]) -> Session:
        if payload.get("expires_at") is not None:
            expires_at = datetime.fromtimestamp(int(payload["expires_at"]), tz=timezone.utc)
        else:
            expires_at = utc_now() + timedelta(seconds=int(payload["expires_in"]))

        return Session(
            user_id=payload["user"]["id"],
            access_token=payload["access_token"],
            refresh_token=payload["refresh_token"],
            expires_at=expires_at,
        )

    def close(self) -> None:
        self.http_client.close()
