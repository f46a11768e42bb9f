"""
Unit tests for the local filesystem storage backend.
"""

from pathlib import Path
from urllib.parse import parse_qs, urlparse

import pytest

from quickscan.domain.errors import StorageError
from quickscan.domain.file_storage import SignedUrlService, StorageType
from quickscan.infrastructure import LocalFileStorageRepository


@pytest.fixture
def signer():
    return SignedUrlService(secret_key="secret")


@pytest.fixture
def repo(tmp_path, signer):
    return LocalFileStorageRepository(tmp_path / "uploads", signer)


class TestLocalFileStorageRepository:
    def test_directory_created_lazily(self, tmp_path, repo):
        assert not (tmp_path / "uploads").exists()

        repo.store("id-1", "a.txt", "text/plain", b"abc")

        assert (tmp_path / "uploads").is_dir()

    def test_store_writes_sanitized_id_prefixed_file(self, tmp_path, repo):
        stored = repo.store("id-1", "my report.pdf", "application/pdf", b"%PDF")

        path = Path(stored.storage_path)
        assert path.is_absolute()
        assert path.name == "id-1_my_report.pdf"
        assert path.parent == (tmp_path / "uploads").resolve()
        assert path.read_bytes() == b"%PDF"
        assert stored.storage_type is StorageType.TEMPORARY
        assert stored.file_size == 4
        assert stored.filename == "my report.pdf"
        assert stored.download_url is None

    def test_traversal_name_stays_inside_upload_dir(self, tmp_path, repo):
        stored = repo.store("id-1", "../../../etc/passwd", None, b"x")

        assert Path(stored.storage_path).parent == (tmp_path / "uploads").resolve()

    def test_retrieve_round_trip(self, repo):
        stored = repo.store("id-1", "a.bin", None, bytes(range(256)))

        assert repo.retrieve(stored) == bytes(range(256))

    def test_retrieve_missing_raises_storage_error(self, repo):
        stored = repo.store("id-1", "a.txt", None, b"abc")
        Path(stored.storage_path).unlink()

        with pytest.raises(StorageError):
            repo.retrieve(stored)

    def test_delete_removes_file(self, repo):
        stored = repo.store("id-1", "a.txt", None, b"abc")

        repo.delete(stored)

        assert not repo.exists(stored)

    def test_delete_of_already_missing_file_succeeds(self, repo):
        stored = repo.store("id-1", "a.txt", None, b"abc")
        Path(stored.storage_path).unlink()

        repo.delete(stored)

    def test_download_url_is_signed(self, repo, signer):
        stored = repo.store("id-1", "a.txt", None, b"abc")

        url = repo.get_download_url(stored, 120)

        parsed = urlparse(url)
        query = parse_qs(parsed.query)
        assert parsed.path == "/api/files/id-1/download"
        assert signer.validate_signature("id-1", query["signature"][0], int(query["expires"][0]))
