"""
File Access Entities

Domain entities for file access tokens, chart records and auth sessions.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from ..errors import InvalidFileAccessTokenError, MalformedPathError
from .value_objects import ChartType, band_id_of

TOKEN_TTL = timedelta(minutes=5)


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass
class FileAccessToken:
    """
    Entity representing a one-time capability grant for a single object.

    The band a token is issued for must be the band encoded in its own
    storage path; construction fails otherwise.
    """

    token: str
    user_id: str
    storage_path: str
    band_id: str
    expires_at: datetime
    created_at: datetime
    used_at: Optional[datetime] = None

    def __post_init__(self):
        try:
            path_band_id = band_id_of(self.storage_path)
        except MalformedPathError as e:
            raise InvalidFileAccessTokenError(str(e), original_error=e) from e

        if path_band_id != self.band_id:
            raise InvalidFileAccessTokenError(
                f"Token band {self.band_id!r} does not match path band "
                f"{path_band_id!r} for {self.storage_path!r}"
            )

    @classmethod
    def create(
        cls,
        storage_path: str,
        user_id: str,
        band_id: str,
        now: Optional[datetime] = None,
        ttl: timedelta = TOKEN_TTL,
    ) -> "FileAccessToken":
        """
        Factory method to create a new token.

        Args:
            storage_path: Object-store key the token authorizes
            user_id: Identity the token is issued to
            band_id: Band owning the object
            now: Issuance time (defaults to the current UTC time)
            ttl: Time to live (default: 5 minutes)

        Returns:
            New FileAccessToken with a random UUID4 token value
        """
        now = now or utc_now()
        return cls(
            token=str(uuid.uuid4()),
            user_id=user_id,
            storage_path=storage_path,
            band_id=band_id,
            expires_at=now + ttl,
            created_at=now,
        )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utc_now()) > self.expires_at

    @property
    def is_used(self) -> bool:
        return self.used_at is not None

    def get_remaining_seconds(self, now: Optional[datetime] = None) -> int:
        """Get remaining seconds until expiration (0 if expired)."""
        remaining = self.expires_at - (now or utc_now())
        return max(0, int(remaining.total_seconds()))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "token": self.token,
            "user_id": self.user_id,
            "storage_path": self.storage_path,
            "band_id": self.band_id,
            "expires_at": self.expires_at.isoformat(),
            "created_at": self.created_at.isoformat(),
            "used_at": self.used_at.isoformat() if self.used_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileAccessToken":
        """Create FileAccessToken from dictionary."""
        used_at = data.get("used_at")
        return cls(
            token=data["token"],
            user_id=data["user_id"],
            storage_path=data["storage_path"],
            band_id=data["band_id"],
            expires_at=datetime.fromisoformat(data["expires_at"]),
            created_at=datetime.fromisoformat(data["created_at"]),
            used_at=datetime.fromisoformat(used_at) if used_at else None,
        )


@dataclass
class ChartRecord:
    """
    Chart attached to a song.

    Only ``storage_path`` and ``url`` matter to the refresh pass; every other
    key of the stored chart is carried through untouched.
    """

    id: str
    type: ChartType
    storage_path: Optional[str] = None
    url: Optional[str] = None
    name: str = ""
    instrument: str = ""
    content: Optional[str] = None
    storage_base64: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN_KEYS = (
        "id",
        "type",
        "storagePath",
        "url",
        "name",
        "instrument",
        "content",
        "storageBase64",
    )

    @property
    def needs_token(self) -> bool:
        """Whether the chart is served from the object store."""
        return bool(self.storage_path) and self.type.is_file_backed

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChartRecord":
        return cls(
            id=data["id"],
            type=ChartType(data["type"]),
            storage_path=data.get("storagePath") or None,
            url=data.get("url"),
            name=data.get("name", ""),
            instrument=data.get("instrument", ""),
            content=data.get("content"),
            storage_base64=data.get("storageBase64"),
            extra={k: v for k, v in data.items() if k not in cls._KNOWN_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data.update({"id": self.id, "type": self.type.value, "name": self.name,
                     "instrument": self.instrument})
        optional = {
            "storagePath": self.storage_path,
            "url": self.url,
            "content": self.content,
            "storageBase64": self.storage_base64,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data


@dataclass(frozen=True)
class Session:
    """Authentication session held by the auth collaborator."""

    user_id: str
    access_token: str
    refresh_token: str
    expires_at: datetime

    def seconds_until_expiry(self, now: Optional[datetime] = None) -> float:
        return (self.expires_at - (now or utc_now())).total_seconds()


@dataclass(frozen=True)
class Identity:
    """Validated caller identity handed out by the session guard."""

    user_id: str
