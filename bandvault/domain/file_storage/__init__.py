"""
File Storage Domain

Object-store contract for band chart and audio files.
"""

from .storage_repository import IFileStorageRepository

__all__ = ["IFileStorageRepository"]
