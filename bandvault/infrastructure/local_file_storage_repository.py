"""
Local File Storage Repository Implementation

IFileStorageRepository backed by a directory on the local filesystem.
Storage paths map directly to files below the base directory.
"""

from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Optional

from ..domain.file_storage.storage_repository import IFileStorageRepository


class LocalFileStorageRepository(IFileStorageRepository):
    """
    Local filesystem implementation of IFileStorageRepository.

    Attributes:
        base_path: Directory holding the ``bands/`` tree
    """

    def __init__(self, base_path: str = "/tmp/bandvault"):
        self.base_path = Path(base_path)
        self._ensure_base_directory()

    def _ensure_base_directory(self) -> None:
        """
        Ensure the base storage directory exists.

        Raises:
            PermissionError: If insufficient permissions to create directory
            OSError: If directory creation fails for other reasons
        """
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except PermissionError as e:
            raise PermissionError(
                f"Insufficient permissions to create storage directory: {self.base_path}"
            ) from e
        except OSError as e:
            raise OSError(
                f"Failed to create storage directory: {self.base_path}"
            ) from e

    def _resolve(self, file_path: str) -> Path:
        """
        Map a storage key below the base directory.

        Raises:
            ValueError: If the key is empty or escapes the base directory
        """
        if not file_path or not file_path.strip():
            raise ValueError("file_path cannot be empty")

        base = self.base_path.resolve()
        full_path = (base / file_path).resolve()
        if base != full_path and base not in full_path.parents:
            raise ValueError(f"file_path escapes storage root: {file_path}")
        return full_path

    def save(
        self, file_path: str, content: BinaryIO, content_type: Optional[str] = None
    ) -> bool:
        full_path = self._resolve(file_path)

        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            if hasattr(content, "seek"):
                content.seek(0)

            with open(full_path, "wb") as f:
                # 8KB chunks
                while True:
                    chunk = content.read(8192)
                    if not chunk:
                        break
                    f.write(chunk)

            return True

        except PermissionError:
            raise
        except OSError as e:
            raise IOError(f"Failed to save file: {e}") from e

    def get(self, file_path: str) -> Optional[BinaryIO]:
        try:
            full_path = self._resolve(file_path)
            if not full_path.is_file():
                return None

            with open(full_path, "rb") as f:
                return BytesIO(f.read())

        except (OSError, ValueError):
            return None

    def delete(self, file_path: str) -> bool:
        try:
            full_path = self._resolve(file_path)
        except ValueError:
            return True

        try:
            if full_path.is_file():
                full_path.unlink()
            return True
        except PermissionError:
            raise
        except OSError as e:
            raise IOError(f"Failed to delete file: {e}") from e

    def exists(self, file_path: str) -> bool:
        try:
            return self._resolve(file_path).is_file()
        except (OSError, ValueError):
            return False

    def get_size(self, file_path: str) -> Optional[int]:
        try:
            full_path = self._resolve(file_path)
            if full_path.is_file():
                return full_path.stat().st_size
            return None
        except (OSError, ValueError):
            return None
