"""
File Access Value Objects

Immutable value objects for the storage path layout and chart kinds.
"""

from dataclasses import dataclass
from enum import Enum

from ..errors import MalformedPathError

STORAGE_ROOT = "bands"


class FileType(Enum):
    """Kind of object kept under a band's prefix."""

    CHART = "chart"
    AUDIO = "audio"

    @property
    def folder(self) -> str:
        return f"{self.value}s"


class ChartType(Enum):
    """Chart formats a song can carry."""

    TEXT = "TEXT"
    IMAGE = "IMAGE"
    PDF = "PDF"
    GP = "GP"

    @property
    def is_file_backed(self) -> bool:
        """Whether charts of this type are served from the object store."""
        return self in FILE_BACKED_CHART_TYPES


FILE_BACKED_CHART_TYPES = frozenset({ChartType.PDF, ChartType.IMAGE, ChartType.GP})


@dataclass(frozen=True)
class StoragePath:
    """
    Structured object-store key.

    Layout: ``bands/{band_id}/{file_type}s/{song_id}/{file_id}.{extension}``.
    The band segment is the only tenant marker at this layer.
    """

    band_id: str
    file_type: FileType
    song_id: str
    file_id: str
    extension: str

    def __post_init__(self):
        for name in ("band_id", "song_id", "file_id", "extension"):
            value = getattr(self, name)
            if not value or "/" in value or value in (".", ".."):
                raise MalformedPathError(f"Invalid {name} segment: {value!r}")

    @classmethod
    def build(
        cls,
        band_id: str,
        file_type: FileType,
        song_id: str,
        file_id: str,
        extension: str,
    ) -> "StoragePath":
        return cls(band_id, file_type, song_id, file_id, extension)

    @classmethod
    def parse(cls, path: str) -> "StoragePath":
        """
        Parse a full storage key.

        Raises:
            MalformedPathError: If the key does not follow the layout
        """
        segments = (path or "").split("/")
        if len(segments) != 5 or segments[0] != STORAGE_ROOT:
            raise MalformedPathError(f"Invalid storage path format: {path!r}")

        _, band_id, folder, song_id, file_name = segments
        file_type = next((t for t in FileType if t.folder == folder), None)
        if file_type is None:
            raise MalformedPathError(f"Unknown file folder {folder!r} in {path!r}")

        file_id, dot, extension = file_name.rpartition(".")
        if not dot:
            raise MalformedPathError(f"Missing file extension in {path!r}")

        return cls(band_id, file_type, song_id, file_id, extension)

    @property
    def key(self) -> str:
        return (
            f"{STORAGE_ROOT}/{self.band_id}/{self.file_type.folder}/"
            f"{self.song_id}/{self.file_id}.{self.extension}"
        )

    def __str__(self) -> str:
        return self.key


def band_id_of(path: str) -> str:
    """
    Return the band segment of a ``bands/...`` path.

    Only the first two segments are inspected, matching the ownership check.

    Raises:
        MalformedPathError: If the path does not start with ``bands/{band_id}``
    """
    segments = (path or "").split("/")
    if len(segments) < 2 or segments[0] != STORAGE_ROOT or not segments[1]:
        raise MalformedPathError(f"Invalid storage path format: {path!r}")
    return segments[1]
