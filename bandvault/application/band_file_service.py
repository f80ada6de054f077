"""
Band File Service

Application service for uploading and deleting band chart and audio files.
Uploads return a servable URL backed by a fresh file access token.
Deletes are gated by PathGuard and fail hard on any ownership problem.
"""

import base64
import logging
import re
import uuid
from dataclasses import dataclass
from io import BytesIO
from typing import Optional

from ..domain.errors import FileUploadError
from ..domain.file_access.path_guard import PathGuard
from ..domain.file_access.session_guard import SessionGuard
from ..domain.file_access.token_issuer import TokenIssuer
from ..domain.file_access.url_builder import build_file_url
from ..domain.file_access.value_objects import FileType, StoragePath
from ..domain.file_storage.storage_repository import IFileStorageRepository

logger = logging.getLogger(__name__)

GUITAR_PRO_PATTERN = re.compile(r"\.(gp|gp3|gp4|gp5|gpx)$", re.IGNORECASE)


@dataclass(frozen=True)
class UploadResult:
    """Outcome of a successful upload."""

    storage_path: str
    url: str
    token: str
    storage_base64: Optional[str] = None


def file_extension(file_name: str) -> str:
    """Extension of ``file_name`` without the dot, ``bin`` when absent."""
    _, dot, extension = (file_name or "").rpartition(".")
    return extension if dot and extension else "bin"


class BandFileService:
    """Coordinates the object store, token issuance and tenant checks."""

    def __init__(
        self,
        storage_repository: IFileStorageRepository,
        session_guard: SessionGuard,
        token_issuer: TokenIssuer,
        path_guard: PathGuard,
        base_url: str,
    ):
        self.storage_repo = storage_repository
        self.session_guard = session_guard
        self.token_issuer = token_issuer
        self.path_guard = path_guard
        self.base_url = base_url

    def upload_file(
        self,
        content: bytes,
        file_name: str,
        mime_type: str,
        song_id: str,
        file_type: FileType,
        band_id: str,
    ) -> UploadResult:
        """
        Store a file under the band's prefix and issue a token for it.

        Args:
            content: Raw file bytes
            file_name: Original file name, used for the extension
            mime_type: MIME type recorded with the object
            song_id: Song the file is attached to
            file_type: Chart or audio
            band_id: Band owning the song

        Returns:
            UploadResult with the storage path and a servable URL

        Raises:
            NoSessionError: If the caller is not signed in
            FileUploadError: If the object store refuses the write
            TokenIssueError: If the token could not be stored
        """
        identity = self.session_guard.ensure_valid_session()

        storage_path = StoragePath.build(
            band_id, file_type, song_id, str(uuid.uuid4()), file_extension(file_name)
        ).key

        try:
            self.storage_repo.save(storage_path, BytesIO(content), content_type=mime_type)
        except (IOError, PermissionError, ValueError) as e:
            logger.error(f"Error uploading {file_type.value} file for song {song_id}: {e}")
            raise FileUploadError(f"Failed to store {file_name}", original_error=e) from e

        token = self.token_issuer.issue_one(storage_path, identity, band_id)
        logger.info(f"Uploaded {file_type.value} file {storage_path}")

        return UploadResult(
            storage_path=storage_path,
            url=build_file_url(self.base_url, storage_path, token.token),
            token=token.token,
        )

    def upload_chart_file(
        self, content: bytes, file_name: str, mime_type: str, song_id: str, band_id: str
    ) -> UploadResult:
        """
        Upload a PDF, image or Guitar Pro chart.

        Guitar Pro files also carry a base64 data URI for the tab renderer.
        """
        result = self.upload_file(
            content, file_name, mime_type, song_id, FileType.CHART, band_id
        )
        if GUITAR_PRO_PATTERN.search(file_name or ""):
            encoded = base64.b64encode(content).decode("ascii")
            return UploadResult(
                storage_path=result.storage_path,
                url=result.url,
                token=result.token,
                storage_base64=f"data:{mime_type or 'application/octet-stream'};base64,{encoded}",
            )
        return result

    def upload_audio_file(
        self, content: bytes, file_name: str, mime_type: str, song_id: str, band_id: str
    ) -> UploadResult:
        """Upload a backing track."""
        return self.upload_file(
            content, file_name, mime_type, song_id, FileType.AUDIO, band_id
        )

    def delete_file(self, file_url: str, band_id: str) -> str:
        """
        Delete the object behind a file URL.

        Args:
            file_url: URL previously handed out for the file
            band_id: Caller's active band

        Returns:
            The deleted storage path

        Raises:
            MalformedPathError: If no valid storage path is in the URL
            CrossTenantViolationError: If the file belongs to another band
            IOError: If the object store fails
        """
        storage_path = self.path_guard.validate_url_ownership(file_url, band_id)
        self.storage_repo.delete(storage_path)
        logger.info(f"Deleted file {storage_path}")
        return storage_path
