"""
File Serving Service

Application service behind the serve-file-inline endpoint. Validates a file
access token against the requested path, records its first use, and loads
the object from the store.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import BinaryIO, Callable

from ..domain.errors import MalformedPathError, TokenRejectedError
from ..domain.file_access.entities import utc_now
from ..domain.file_access.repositories import FileAccessTokenRepository
from ..domain.file_access.value_objects import band_id_of
from ..domain.file_storage.storage_repository import IFileStorageRepository

logger = logging.getLogger(__name__)

# PDF viewers re-request the same URL on reload, zoom or print
TOKEN_REUSE_GRACE_PERIOD = timedelta(seconds=30)

CONTENT_TYPES = {
    "pdf": "application/pdf",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "gp": "application/octet-stream",
    "gp3": "application/octet-stream",
    "gp4": "application/octet-stream",
    "gp5": "application/octet-stream",
    "gpx": "application/octet-stream",
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
    "m4a": "audio/mp4",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def content_type_for(storage_path: str) -> str:
    extension = storage_path.rsplit(".", 1)[-1].lower() if "." in storage_path else ""
    return CONTENT_TYPES.get(extension, DEFAULT_CONTENT_TYPE)


@dataclass
class ServedFile:
    """Object content ready to be streamed inline."""

    storage_path: str
    content: BinaryIO
    content_type: str


class FileServingService:
    """Consumes file access tokens and loads the authorized object."""

    def __init__(
        self,
        token_repository: FileAccessTokenRepository,
        storage_repository: IFileStorageRepository,
        grace_period: timedelta = TOKEN_REUSE_GRACE_PERIOD,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.token_repo = token_repository
        self.storage_repo = storage_repository
        self.grace_period = grace_period
        self.clock = clock

    def serve(self, storage_path: str, token: str) -> ServedFile:
        """
        Validate a request and load the file.

        Args:
            storage_path: ``path`` query parameter
            token: ``token`` query parameter

        Returns:
            ServedFile with the object content

        Raises:
            TokenRejectedError: With 400, 401, 403 or 404 as the status code
        """
        if not storage_path:
            raise TokenRejectedError(400, "Missing path parameter")
        if ".." in storage_path:
            raise TokenRejectedError(400, "Invalid path")
        if not token:
            raise TokenRejectedError(401, "Missing token parameter")

        record = self.token_repo.get(token)
        if record is None:
            raise TokenRejectedError(401, "Invalid or expired token")

        if record.is_expired(self.clock()):
            raise TokenRejectedError(401, "Token has expired")

        if storage_path != record.storage_path:
            logger.warning(f"Token {token[:8]} presented for a different path")
            raise TokenRejectedError(403, "Token is not valid for this file")

        try:
            path_band_id = band_id_of(storage_path)
        except MalformedPathError as e:
            raise TokenRejectedError(400, "Invalid storage path format") from e

        if path_band_id != record.band_id:
            raise TokenRejectedError(403, "File does not belong to the authorized band")

        self._consume(token)

        content = self.storage_repo.get(storage_path)
        if content is None:
            logger.error(f"Object missing for authorized token {token[:8]}: {storage_path}")
            raise TokenRejectedError(404, "File not found or access denied")

        return ServedFile(
            storage_path=storage_path,
            content=content,
            content_type=content_type_for(storage_path),
        )

    def _consume(self, token: str) -> None:
        """Record first use, allowing reuse only within the grace period."""
        now = self.clock()
        result = self.token_repo.claim(token, now)
        if result is None:
            raise TokenRejectedError(401, "Token validation failed")

        claimed_now, used_at = result
        if not claimed_now and now - used_at > self.grace_period:
            raise TokenRejectedError(401, "Token has already been used")
