"""
Local File Storage Repository Implementation

Concrete implementation of IFileStorageRepository for the local filesystem.
Files are written flat into one upload directory as '<id>_<sanitized name>'
so that names never collide and the expiry sweeper can scan a single level.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from quickscan.domain.errors import StorageError
from quickscan.domain.file_storage import (
    IFileStorageRepository,
    SignedUrlService,
    StorageType,
    StoredFile,
    local_file_name,
)

logger = logging.getLogger(__name__)


class LocalFileStorageRepository(IFileStorageRepository):
    """
    Local filesystem implementation of IFileStorageRepository.

    Download URLs point at the internal download endpoint and are signed by
    the SignedUrlService, so they expire like remote signed URLs do.

    Attributes:
        base_path: Upload directory
    """

    storage_type = StorageType.TEMPORARY

    def __init__(self, base_path: Union[str, Path], signed_url_service: SignedUrlService):
        """
        Initialize the local file storage repository.

        Args:
            base_path: Upload directory, created lazily on first store
            signed_url_service: Signer for internal download links
        """
        self.base_path = Path(base_path)
        self.signed_url_service = signed_url_service

    def _ensure_base_directory(self) -> None:
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create upload directory: {self.base_path}", e) from e

    def store(
        self,
        file_id: str,
        filename: str,
        content_type: Optional[str],
        data: bytes,
    ) -> StoredFile:
        self._ensure_base_directory()
        full_path = (self.base_path / local_file_name(file_id, filename)).resolve()

        try:
            with open(full_path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise StorageError(f"Failed to save file: {e}", e) from e

        logger.debug(f"Stored {len(data)} bytes at {full_path}")
        return StoredFile(
            id=file_id,
            filename=filename,
            file_size=len(data),
            content_type=content_type,
            storage_path=str(full_path),
            storage_type=self.storage_type,
            timestamp=StoredFile.now(),
        )

    def retrieve(self, stored_file: StoredFile) -> bytes:
        path = Path(stored_file.storage_path)
        if not path.is_file():
            raise StorageError(f"File not found in storage: {stored_file.filename}")

        try:
            return path.read_bytes()
        except OSError as e:
            raise StorageError(f"Failed to read file: {e}", e) from e

    def delete(self, stored_file: StoredFile) -> None:
        path = Path(stored_file.storage_path)
        try:
            path.unlink()
        except FileNotFoundError:
            # Bytes already gone (e.g. swept); the registry entry can still go
            logger.info(f"Local file already removed: {path}")
        except OSError as e:
            raise StorageError(f"Failed to delete file: {e}", e) from e

    def get_download_url(self, stored_file: StoredFile, expires_in: int) -> str:
        return self.signed_url_service.generate_signed_url(stored_file.id, expires_in).url

    def exists(self, stored_file: StoredFile) -> bool:
        return Path(stored_file.storage_path).is_file()
