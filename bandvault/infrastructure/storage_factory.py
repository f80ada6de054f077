"""
Storage Factory

Selects the object-store backend from the environment:
- GCS_BUCKET_NAME set: Google Cloud Storage
- otherwise: local filesystem under STORAGE_DIR
"""

import logging
import os

from ..domain.file_storage.storage_repository import IFileStorageRepository
from .local_file_storage_repository import LocalFileStorageRepository

logger = logging.getLogger(__name__)


class StorageFactory:
    """Factory for object-store repository implementations."""

    @staticmethod
    def create_storage() -> IFileStorageRepository:
        """
        Create storage repository based on environment configuration.

        Environment Variables:
            GCS_BUCKET_NAME: If set, enables GCS storage
            STORAGE_DIR: Base directory for local storage (default: /tmp/bandvault)

        Raises:
            RuntimeError: If storage initialization fails
        """
        gcs_bucket_name = os.getenv("GCS_BUCKET_NAME")
        if gcs_bucket_name:
            return StorageFactory._create_gcs_storage(gcs_bucket_name)
        return StorageFactory._create_local_storage()

    @staticmethod
    def _create_local_storage() -> IFileStorageRepository:
        storage_dir = os.getenv("STORAGE_DIR", "/tmp/bandvault")
        try:
            storage = LocalFileStorageRepository(storage_dir)
        except Exception as e:
            raise RuntimeError(f"Failed to initialize local storage: {e}") from e

        logger.info(f"Storage factory: Using local filesystem storage at {storage_dir}")
        return storage

    @staticmethod
    def _create_gcs_storage(bucket_name: str) -> IFileStorageRepository:
        try:
            from .gcs_storage_repository import GCSStorageRepository

            storage = GCSStorageRepository(bucket_name)
        except Exception as e:
            raise RuntimeError(f"Failed to initialize GCS storage: {e}") from e

        logger.info(f"Storage factory: Using GCS bucket {bucket_name}")
        return storage
