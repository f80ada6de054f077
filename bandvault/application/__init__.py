"""
Application Layer

Orchestrates domain services for chart refresh, file upload/delete,
file serving and token cleanup.
"""

from .band_file_service import BandFileService, UploadResult
from .chart_url_refresher import ChartUrlRefresher
from .dependency_container import DependencyContainer, DependencyNotFoundError
from .file_access_services import FileAccessServices, create_file_access_services
from .file_serving_service import FileServingService, ServedFile
from .token_cleanup_service import CleanupResult, TokenCleanupService

__all__ = [
    "BandFileService",
    "ChartUrlRefresher",
    "CleanupResult",
    "DependencyContainer",
    "DependencyNotFoundError",
    "FileAccessServices",
    "FileServingService",
    "ServedFile",
    "TokenCleanupService",
    "UploadResult",
    "create_file_access_services",
]
