"""
Path Guard

Tenant isolation checks for caller-supplied storage paths and file URLs.
Used in front of every destructive object-store operation.
"""

import logging
from urllib.parse import parse_qs, urlsplit

from ..errors import CrossTenantViolationError, MalformedPathError
from .url_builder import SERVE_FILE_ROUTE
from .value_objects import STORAGE_ROOT

logger = logging.getLogger(__name__)

LEGACY_BUCKET_MARKER = "/band-files/"


class PathGuard:
    """
    Stateless ownership checks based purely on path segments.

    Failures are hard errors; callers must abort the operation.
    """

    def validate_ownership(self, path: str, expected_band_id: str) -> None:
        """
        Verify that ``path`` lives under ``bands/{expected_band_id}/``.

        Args:
            path: Storage path taken from untrusted input
            expected_band_id: Caller's active band

        Raises:
            MalformedPathError: If the path does not start with ``bands/{id}``
                or contains relative segments
            CrossTenantViolationError: If the band segment differs
        """
        if not expected_band_id:
            raise MalformedPathError("No band selected")

        segments = (path or "").split("/")
        if len(segments) < 2 or segments[0] != STORAGE_ROOT or not segments[1]:
            raise MalformedPathError(f"Invalid storage path format: {path!r}")

        if any(segment in (".", "..") for segment in segments):
            raise MalformedPathError(f"Relative segments are not allowed: {path!r}")

        path_band_id = segments[1]
        if path_band_id != expected_band_id:
            logger.error(
                f"Cross-tenant access blocked: path band {path_band_id} "
                f"!= active band {expected_band_id}"
            )
            raise CrossTenantViolationError(path_band_id, expected_band_id)

    def extract_storage_path(self, file_url: str) -> str:
        """
        Recover the storage path embedded in a file URL.

        Understands serve-file-inline URLs (``path`` query parameter) and
        object-store URLs containing ``/band-files/``.

        Raises:
            MalformedPathError: If no storage path can be found
        """
        if not file_url:
            raise MalformedPathError("Empty file URL")

        parts = urlsplit(file_url)
        if parts.path.endswith(SERVE_FILE_ROUTE):
            values = parse_qs(parts.query).get("path")
            if not values or not values[0]:
                raise MalformedPathError("File URL has no path parameter")
            return values[0]

        if LEGACY_BUCKET_MARKER in file_url:
            path = file_url.split(LEGACY_BUCKET_MARKER, 1)[1].split("?", 1)[0]
            if path:
                return path

        raise MalformedPathError(f"Unrecognised file URL: {file_url!r}")

    def validate_url_ownership(self, file_url: str, expected_band_id: str) -> str:
        """
        Extract the storage path from a URL and validate its ownership.

        Returns:
            The validated storage path
        """
        path = self.extract_storage_path(file_url)
        self.validate_ownership(path, expected_band_id)
        return path
