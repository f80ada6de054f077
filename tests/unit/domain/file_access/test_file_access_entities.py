"""
Unit Tests for File Access Entities

FileAccessToken band invariant and lifecycle, ChartRecord conversion.
"""

from datetime import timedelta

import pytest

from bandvault.domain.errors import InvalidFileAccessTokenError
from bandvault.domain.file_access.entities import (
    TOKEN_TTL,
    ChartRecord,
    FileAccessToken,
)
from bandvault.domain.file_access.value_objects import ChartType
from tests.fixtures.mock_repositories import FIXED_NOW, make_session

PATH = "bands/band-a/charts/song-1/file-1.pdf"


class TestFileAccessToken:
    def test_create_sets_five_minute_expiry(self):
        token = FileAccessToken.create(PATH, "user-1", "band-a", now=FIXED_NOW)
        assert token.expires_at == FIXED_NOW + timedelta(minutes=5)
        assert token.created_at == FIXED_NOW
        assert token.used_at is None
        assert TOKEN_TTL == timedelta(minutes=5)

    def test_create_generates_distinct_values(self):
        first = FileAccessToken.create(PATH, "user-1", "band-a", now=FIXED_NOW)
        second = FileAccessToken.create(PATH, "user-1", "band-a", now=FIXED_NOW)
        assert first.token != second.token

    def test_band_must_match_path(self):
        with pytest.raises(InvalidFileAccessTokenError):
            FileAccessToken.create(PATH, "user-1", "band-b", now=FIXED_NOW)

    def test_malformed_path_is_rejected(self):
        with pytest.raises(InvalidFileAccessTokenError):
            FileAccessToken.create("uploads/file.pdf", "user-1", "band-a", now=FIXED_NOW)

    def test_expiry_boundary(self):
        token = FileAccessToken.create(PATH, "user-1", "band-a", now=FIXED_NOW)
        assert not token.is_expired(token.expires_at)
        assert token.is_expired(token.expires_at + timedelta(microseconds=1))

    def test_remaining_seconds_never_negative(self):
        token = FileAccessToken.create(PATH, "user-1", "band-a", now=FIXED_NOW)
        assert token.get_remaining_seconds(FIXED_NOW) == 300
        assert token.get_remaining_seconds(FIXED_NOW + timedelta(hours=1)) == 0

    def test_dict_conversion_preserves_fields(self):
        token = FileAccessToken.create(PATH, "user-1", "band-a", now=FIXED_NOW)
        token.used_at = FIXED_NOW + timedelta(seconds=10)

        restored = FileAccessToken.from_dict(token.to_dict())

        assert restored == token
        assert restored.is_used


class TestChartRecord:
    def test_from_dict_keeps_unknown_keys(self):
        chart = ChartRecord.from_dict({
            "id": "c1",
            "type": "PDF",
            "storagePath": PATH,
            "url": "https://old",
            "name": "Lead sheet",
            "instrument": "guitar",
            "key": "E",
        })
        assert chart.type is ChartType.PDF
        assert chart.extra == {"key": "E"}
        assert chart.to_dict()["key"] == "E"
        assert chart.to_dict()["storagePath"] == PATH

    def test_needs_token_requires_path_and_file_type(self):
        assert ChartRecord(id="c1", type=ChartType.PDF, storage_path=PATH).needs_token
        assert not ChartRecord(id="c2", type=ChartType.PDF).needs_token
        assert not ChartRecord(id="c3", type=ChartType.TEXT, storage_path=PATH).needs_token

    def test_empty_storage_path_counts_as_missing(self):
        chart = ChartRecord.from_dict({"id": "c1", "type": "IMAGE", "storagePath": ""})
        assert chart.storage_path is None
        assert not chart.needs_token


class TestSession:
    def test_seconds_until_expiry(self):
        session = make_session(expires_in=90)
        assert session.seconds_until_expiry(FIXED_NOW) == 90
