"""
File Access Services

Builds the session-bound services a signed-in client process uses: the
chart URL refresher and the band file service. Both share one session
guard and one token issuer over the caller's auth gateway.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..config.file_access_config import FileAccessConfig
from ..config.supabase_config import create_auth_gateway
from ..domain.file_access.auth_gateway import AuthGateway
from ..domain.file_access.entities import utc_now
from ..domain.file_access.path_guard import PathGuard
from ..domain.file_access.repositories import FileAccessTokenRepository
from ..domain.file_access.session_guard import SessionGuard
from ..domain.file_access.token_issuer import TokenIssuer
from ..domain.file_storage.storage_repository import IFileStorageRepository
from .band_file_service import BandFileService
from .chart_url_refresher import ChartUrlRefresher

logger = logging.getLogger(__name__)


@dataclass
class FileAccessServices:
    """Services bound to one signed-in user's session."""

    auth_gateway: AuthGateway
    session_guard: SessionGuard
    token_issuer: TokenIssuer
    chart_url_refresher: ChartUrlRefresher
    band_file_service: BandFileService


def create_file_access_services(
    token_repository: FileAccessTokenRepository,
    storage_repository: IFileStorageRepository,
    auth_gateway: Optional[AuthGateway] = None,
    config: Optional[FileAccessConfig] = None,
    clock: Callable[[], datetime] = utc_now,
) -> FileAccessServices:
    """
    Wire the refresher and the file service.

    Args:
        token_repository: Token store shared with the serving endpoint
        storage_repository: Object store holding the band files
        auth_gateway: Session holder; a Supabase gateway from the environment if None
        config: File access settings; read from the environment if None
        clock: Source of the current UTC time

    Returns:
        FileAccessServices sharing one session guard and token issuer

    Raises:
        RuntimeError: If no gateway is given and Supabase is not configured
    """
    if config is None:
        config = FileAccessConfig()
    if auth_gateway is None:
        auth_gateway = create_auth_gateway()

    session_guard = SessionGuard(
        auth_gateway, refresh_threshold=config.session_refresh_threshold, clock=clock
    )
    token_issuer = TokenIssuer(token_repository, clock=clock)

    refresher = ChartUrlRefresher(session_guard, token_issuer, config.functions_base_url)
    band_file_service = BandFileService(
        storage_repository,
        session_guard,
        token_issuer,
        PathGuard(),
        config.functions_base_url,
    )

    logger.debug(f"File access services serving URLs from {config.functions_base_url}")
    return FileAccessServices(
        auth_gateway=auth_gateway,
        session_guard=session_guard,
        token_issuer=token_issuer,
        chart_url_refresher=refresher,
        band_file_service=band_file_service,
    )
