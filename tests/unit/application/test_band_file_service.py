"""
Unit Tests for BandFileService

Upload path layout, token-backed URLs and guarded deletes.
"""

import base64
from unittest.mock import Mock
from urllib.parse import parse_qs, urlsplit

import pytest

from bandvault.application.band_file_service import BandFileService, file_extension
from bandvault.domain.errors import (
    CrossTenantViolationError,
    FileUploadError,
    MalformedPathError,
    NoSessionError,
)
from bandvault.domain.file_access.session_guard import SessionGuard
from bandvault.domain.file_access.url_builder import build_file_url
from bandvault.domain.file_access.value_objects import FileType, StoragePath
from tests.fixtures.mock_repositories import MockAuthGateway


@pytest.fixture
def service(storage_repository, session_guard, token_issuer, path_guard, base_url):
    return BandFileService(storage_repository, session_guard, token_issuer, path_guard, base_url)


class TestFileExtension:
    @pytest.mark.parametrize("name,expected", [
        ("lead.pdf", "pdf"),
        ("song.v2.gp5", "gp5"),
        ("noext", "bin"),
        ("trailing.", "bin"),
        ("", "bin"),
    ])
    def test_extension(self, name, expected):
        assert file_extension(name) == expected


class TestUpload:
    def test_chart_upload_stores_under_band_prefix(self, service, storage_repository, token_repository):
        result = service.upload_chart_file(b"%PDF", "lead.pdf", "application/pdf", "song-1", "band-a")

        parsed = StoragePath.parse(result.storage_path)
        assert parsed.band_id == "band-a"
        assert parsed.file_type is FileType.CHART
        assert parsed.song_id == "song-1"
        assert parsed.extension == "pdf"
        assert storage_repository.exists(result.storage_path)
        assert result.storage_base64 is None

        query = {k: v[0] for k, v in parse_qs(urlsplit(result.url).query).items()}
        assert query == {"path": result.storage_path, "token": result.token}
        assert token_repository.get(result.token).storage_path == result.storage_path

    def test_guitar_pro_upload_carries_data_uri(self, service):
        content = b"GP5 bytes"
        result = service.upload_chart_file(
            content, "Riff.GP5", "application/octet-stream", "song-1", "band-a"
        )
        expected = base64.b64encode(content).decode("ascii")
        assert result.storage_base64 == f"data:application/octet-stream;base64,{expected}"

    def test_audio_upload(self, service):
        result = service.upload_audio_file(b"ID3", "track.mp3", "audio/mpeg", "song-1", "band-a")
        assert result.storage_path.startswith("bands/band-a/audios/song-1/")

    def test_requires_session(self, storage_repository, token_issuer, path_guard, base_url):
        service = BandFileService(
            storage_repository, SessionGuard(MockAuthGateway(None)), token_issuer, path_guard, base_url
        )
        with pytest.raises(NoSessionError):
            service.upload_audio_file(b"x", "a.mp3", "audio/mpeg", "s", "band-a")
        assert storage_repository._objects == {}

    def test_storage_failure_raises_upload_error(self, session_guard, token_issuer, path_guard, base_url):
        storage = Mock()
        storage.save.side_effect = IOError("disk full")
        service = BandFileService(storage, session_guard, token_issuer, path_guard, base_url)

        with pytest.raises(FileUploadError):
            service.upload_chart_file(b"x", "a.pdf", "application/pdf", "s", "band-a")


class TestDelete:
    def test_deletes_own_file(self, service, storage_repository):
        uploaded = service.upload_chart_file(b"x", "a.pdf", "application/pdf", "s", "band-a")

        deleted = service.delete_file(uploaded.url, "band-a")

        assert deleted == uploaded.storage_path
        assert not storage_repository.exists(uploaded.storage_path)

    def test_refuses_other_band(self, service, storage_repository):
        uploaded = service.upload_chart_file(b"x", "a.pdf", "application/pdf", "s", "band-a")

        with pytest.raises(CrossTenantViolationError):
            service.delete_file(uploaded.url, "band-b")
        assert storage_repository.exists(uploaded.storage_path)

    def test_refuses_unparseable_url(self, service):
        with pytest.raises(MalformedPathError):
            service.delete_file("https://example.com/random.pdf", "band-a")

    def test_refuses_traversal(self, service):
        url = build_file_url("https://h", "bands/band-a/../band-b/charts/s/f.pdf", "t")
        with pytest.raises(MalformedPathError):
            service.delete_file(url, "band-a")
