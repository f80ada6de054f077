"""
Google Cloud Storage Repository Implementation

IFileStorageRepository backed by a private GCS bucket. Objects are never
exposed through bucket URLs; clients reach them only through the
serve-file-inline endpoint with a file access token.
"""

from io import BytesIO
from typing import BinaryIO, Optional

from google.cloud import storage
from google.cloud.exceptions import GoogleCloudError, NotFound

from ..domain.file_storage.storage_repository import IFileStorageRepository


class GCSStorageRepository(IFileStorageRepository):
    """
    Google Cloud Storage implementation of IFileStorageRepository.

    Attributes:
        bucket_name: Name of the GCS bucket holding band files
        client: Google Cloud Storage client instance
        bucket: GCS bucket object
    """

    def __init__(self, bucket_name: str, client: Optional[storage.Client] = None):
        """
        Initialize the GCS storage repository.

        Raises:
            ValueError: If bucket_name is empty
        """
        if not bucket_name or not bucket_name.strip():
            raise ValueError("bucket_name cannot be empty")

        self.bucket_name = bucket_name
        self.client = client or storage.Client()
        self.bucket = self.client.bucket(bucket_name)

    @staticmethod
    def _is_permission_error(error: Exception) -> bool:
        return "403" in str(error) or "permission" in str(error).lower()

    def save(
        self, file_path: str, content: BinaryIO, content_type: Optional[str] = None
    ) -> bool:
        if not file_path or not file_path.strip():
            raise ValueError("file_path cannot be empty")

        try:
            blob = self.bucket.blob(file_path)
            if hasattr(content, "seek"):
                content.seek(0)
            blob.upload_from_file(content, content_type=content_type)
            return True

        except GoogleCloudError as e:
            if self._is_permission_error(e):
                raise PermissionError(f"Insufficient permissions to write to GCS: {e}") from e
            raise IOError(f"Failed to save file to GCS: {e}") from e

    def get(self, file_path: str) -> Optional[BinaryIO]:
        if not file_path or not file_path.strip():
            return None

        try:
            blob = self.bucket.blob(file_path)
            content = BytesIO()
            blob.download_to_file(content)
            content.seek(0)
            return content

        except NotFound:
            return None
        except GoogleCloudError:
            return None

    def delete(self, file_path: str) -> bool:
        if not file_path or not file_path.strip():
            return True

        try:
            self.bucket.blob(file_path).delete()
            return True

        except NotFound:
            return True
        except GoogleCloudError as e:
            if self._is_permission_error(e):
                raise PermissionError(f"Insufficient permissions to delete from GCS: {e}") from e
            raise IOError(f"Failed to delete file from GCS: {e}") from e

    def exists(self, file_path: str) -> bool:
        if not file_path or not file_path.strip():
            return False

        try:
            return self.bucket.blob(file_path).exists()
        except GoogleCloudError:
            return False

    def get_size(self, file_path: str) -> Optional[int]:
        if not file_path or not file_path.strip():
            return None

        try:
            blob = self.bucket.get_blob(file_path)
            return blob.size if blob is not None else None
        except GoogleCloudError:
            return None
