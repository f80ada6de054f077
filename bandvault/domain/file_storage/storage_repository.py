"""
File Storage Repository Interface

Abstract interface for object-store operations on band files.
Keeps the domain layer independent of the concrete backend
(local filesystem or Google Cloud Storage).
"""

from abc import ABC, abstractmethod
from typing import BinaryIO, Optional


class IFileStorageRepository(ABC):
    """
    Unified interface for object-store operations.

    Contract Guarantees:
    - Keys are storage paths (``bands/{band}/{type}s/{song}/{file}.{ext}``)
    - get() returns None for missing objects instead of raising
    - delete() is idempotent
    - exists() never raises
    """

    @abstractmethod
    def save(
        self, file_path: str, content: BinaryIO, content_type: Optional[str] = None
    ) -> bool:
        """
        Save object content.

        Args:
            file_path: Storage key
            content: Binary content as a file-like object
            content_type: Optional MIME type recorded with the object

        Returns:
            True if the object was stored

        Raises:
            ValueError: If file_path is empty
            PermissionError: If the backend refuses the write
            IOError: If the write fails
        """
        pass  # pragma: no cover

    @abstractmethod
    def get(self, file_path: str) -> Optional[BinaryIO]:
        """
        Retrieve object content.

        Returns:
            Binary stream positioned at the start, or None if missing.
            The caller closes the stream.
        """
        pass  # pragma: no cover

    @abstractmethod
    def delete(self, file_path: str) -> bool:
        """
        Delete an object. Deleting a missing object succeeds.

        Raises:
            PermissionError: If the backend refuses the delete
            IOError: If the delete fails
        """
        pass  # pragma: no cover

    @abstractmethod
    def exists(self, file_path: str) -> bool:
        """Check whether an object exists."""
        pass  # pragma: no cover

    @abstractmethod
    def get_size(self, file_path: str) -> Optional[int]:
        """Size of an object in bytes, or None if missing."""
        pass  # pragma: no cover
