"""
Unit Tests for LocalFileStorageRepository
"""

from io import BytesIO

import pytest

from bandvault.infrastructure.local_file_storage_repository import LocalFileStorageRepository

KEY = "bands/band-a/charts/s/f.pdf"


@pytest.fixture
def storage(tmp_path):
    return LocalFileStorageRepository(str(tmp_path / "store"))


def test_save_and_get(storage):
    assert storage.save(KEY, BytesIO(b"hello"), content_type="application/pdf")
    assert storage.get(KEY).read() == b"hello"
    assert storage.exists(KEY)
    assert storage.get_size(KEY) == 5


def test_missing_file(storage):
    assert storage.get(KEY) is None
    assert not storage.exists(KEY)
    assert storage.get_size(KEY) is None


def test_delete_is_idempotent(storage):
    storage.save(KEY, BytesIO(b"x"))
    assert storage.delete(KEY)
    assert storage.delete(KEY)
    assert not storage.exists(KEY)


def test_keys_cannot_escape_base_directory(storage, tmp_path):
    with pytest.raises(ValueError):
        storage.save("../outside.txt", BytesIO(b"x"))
    assert not (tmp_path / "outside.txt").exists()
    assert storage.get("../../etc/passwd") is None


def test_empty_key_is_rejected(storage):
    with pytest.raises(ValueError):
        storage.save("  ", BytesIO(b"x"))
