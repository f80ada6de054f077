"""
Unit Tests for GCSStorageRepository with a mocked client
"""

from io import BytesIO
from unittest.mock import MagicMock

import pytest
from google.cloud.exceptions import Forbidden, InternalServerError, NotFound

from bandvault.infrastructure.gcs_storage_repository import GCSStorageRepository

KEY = "bands/band-a/audios/s/f.mp3"


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def bucket(client):
    return client.bucket.return_value


@pytest.fixture
def storage(client):
    return GCSStorageRepository("band-files", client=client)


def test_requires_bucket_name(client):
    with pytest.raises(ValueError):
        GCSStorageRepository(" ", client=client)


def test_save_uploads_with_content_type(storage, bucket):
    assert storage.save(KEY, BytesIO(b"abc"), content_type="audio/mpeg")
    bucket.blob.assert_called_with(KEY)
    upload = bucket.blob.return_value.upload_from_file
    assert upload.call_args.kwargs == {"content_type": "audio/mpeg"}


def test_save_permission_error(storage, bucket):
    bucket.blob.return_value.upload_from_file.side_effect = Forbidden("403 denied")
    with pytest.raises(PermissionError):
        storage.save(KEY, BytesIO(b"abc"))


def test_save_other_errors_become_io_errors(storage, bucket):
    bucket.blob.return_value.upload_from_file.side_effect = InternalServerError("boom")
    with pytest.raises(IOError):
        storage.save(KEY, BytesIO(b"abc"))


def test_get_downloads_content(storage, bucket):
    bucket.blob.return_value.download_to_file.side_effect = lambda f: f.write(b"data")
    assert storage.get(KEY).read() == b"data"


def test_get_missing_returns_none(storage, bucket):
    bucket.blob.return_value.download_to_file.side_effect = NotFound("missing")
    assert storage.get(KEY) is None


def test_delete_missing_is_success(storage, bucket):
    bucket.blob.return_value.delete.side_effect = NotFound("missing")
    assert storage.delete(KEY) is True


def test_get_size(storage, bucket):
    bucket.get_blob.return_value.size = 42
    assert storage.get_size(KEY) == 42
    bucket.get_blob.return_value = None
    assert storage.get_size(KEY) is None
