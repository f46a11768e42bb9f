"""
File Service

Orchestrates uploads, downloads, download links, deletes and cleanup over
the file registry and the storage service.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

from quickscan.domain.errors import AccessDeniedError, NotFoundError, RequestValidationError
from quickscan.domain.file_storage import ExpirySweeper, FileRegistry, SignedUrlService, StorageType, StoredFile
from quickscan.infrastructure.storage_service import StorageService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DownloadLink:
    file_id: str
    filename: str
    download_url: str
    expires_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.file_id,
            "filename": self.filename,
            "download_url": self.download_url,
            "expires_at": self.expires_at,
        }


class FileService:
    """
    Application service behind /upload and /files.

    Lock discipline comes from the registry: uploads and deletes write,
    everything else reads. Deletion removes the registry entry only after
    the backend delete succeeded.
    """

    def __init__(
        self,
        registry: FileRegistry,
        storage_service: StorageService,
        signed_url_service: SignedUrlService,
        sweeper: ExpirySweeper,
        max_upload_bytes: int = 10 * 1024 * 1024,
        download_url_ttl: int = 3600,
        require_signed_downloads: bool = False,
        cleanup_max_age_hours: float = 24,
    ):
        self.registry = registry
        self.storage_service = storage_service
        self.signed_url_service = signed_url_service
        self.sweeper = sweeper
        self.max_upload_bytes = max_upload_bytes
        self.download_url_ttl = download_url_ttl
        self.require_signed_downloads = require_signed_downloads
        self.cleanup_max_age_hours = cleanup_max_age_hours

    def upload(self, filename: Optional[str], content_type: Optional[str], data: Optional[bytes]) -> StoredFile:
        """
        Validate and store an uploaded file, then register it.

        Raises:
            RequestValidationError: No file, or file above the size limit
            StorageError / ExternalServiceError: Backend write failed
        """
        if not filename or data is None:
            raise RequestValidationError("No file found in upload", ["file: No file found in upload"])

        if len(data) > self.max_upload_bytes:
            limit_mb = self.max_upload_bytes // (1024 * 1024)
            raise RequestValidationError(
                f"File size exceeds {limit_mb}MB limit",
                [f"file: File size exceeds {limit_mb}MB limit"],
            )

        stored_file = self.storage_service.store(filename, content_type, data)
        self.registry.insert(stored_file)

        logger.info(
            f"Uploaded file {stored_file.id} ({stored_file.file_size} bytes) "
            f"to {stored_file.storage_type.value} storage"
        )
        return stored_file

    def list_files(self) -> List[StoredFile]:
        return self.registry.list_all()

    def get_file(self, file_id: str) -> StoredFile:
        """
        Raises:
            NotFoundError: If the id is not registered
        """
        stored_file = self.registry.get(file_id)
        if stored_file is None:
            raise NotFoundError("File not found")
        return stored_file

    def download(
        self,
        file_id: str,
        expires: Optional[str] = None,
        signature: Optional[str] = None,
    ) -> Tuple[StoredFile, bytes]:
        """
        Return a file's metadata and bytes.

        A signed link (expires + signature) is checked whenever one is
        presented; unsigned requests are refused only when signed downloads
        are required.

        Raises:
            AccessDeniedError: Bad, partial or expired link
            NotFoundError: Unknown id
            StorageError: Bytes missing from the backend
        """
        self._check_download_link(file_id, expires, signature)
        stored_file = self.get_file(file_id)
        data = self.storage_service.retrieve(stored_file)
        return stored_file, data

    def _check_download_link(self, file_id: str, expires: Optional[str], signature: Optional[str]) -> None:
        if expires is None and signature is None:
            if self.require_signed_downloads:
                raise AccessDeniedError("A signed download link is required")
            return

        if not expires or not signature:
            raise AccessDeniedError("Invalid download link")

        try:
            expires_ts = int(expires)
        except ValueError:
            raise AccessDeniedError("Invalid download link") from None

        if not self.signed_url_service.validate_signature(file_id, signature, expires_ts):
            logger.warning(f"Rejected download of {file_id}: bad signature")
            raise AccessDeniedError("Invalid download signature")

        if self.signed_url_service.is_expired(expires_ts):
            raise AccessDeniedError("Download link has expired")

    def get_download_url(self, file_id: str, ttl_seconds: Optional[int] = None) -> DownloadLink:
        """
        Produce a time-limited download URL for a file.

        Raises:
            NotFoundError: Unknown id
        """
        ttl = ttl_seconds if ttl_seconds is not None else self.download_url_ttl
        stored_file = self.get_file(file_id)
        if stored_file.storage_type is StorageType.TEMPORARY:
            # Report the exact expiry that was signed into the link
            signed = self.signed_url_service.generate_signed_url(stored_file.id, ttl)
            url, expires_at = signed.url, signed.expires_at
        else:
            url = self.storage_service.get_download_url(stored_file, ttl)
            expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl)
        return DownloadLink(
            file_id=stored_file.id,
            filename=stored_file.filename,
            download_url=url,
            expires_at=expires_at.isoformat(),
        )

    def delete(self, file_id: str) -> StoredFile:
        """
        Delete a file's bytes, then its registry entry.

        Raises:
            NotFoundError: Unknown id
            StorageError / ExternalServiceError: Backend delete failed; the
                registry entry is left in place
        """
        stored_file = self.get_file(file_id)
        self.storage_service.delete(stored_file)
        self.registry.remove(file_id)
        logger.info(f"Deleted file {file_id}")
        return stored_file

    def cleanup(self, max_age_hours: Optional[float] = None) -> int:
        """
        Sweep expired local files and drop registry entries left without bytes.

        Returns:
            Number of files deleted from disk
        """
        if max_age_hours is None:
            max_age_hours = self.cleanup_max_age_hours
        deleted_count = self.sweeper.sweep(max_age_hours)
        # Disk checks run outside the registry write lock
        missing = [
            f.id
            for f in self.registry.list_all()
            if f.storage_type is StorageType.TEMPORARY and not self.storage_service.local_file_exists(f)
        ]
        pruned = self.registry.remove_many(missing)
        if pruned:
            logger.info(f"Pruned {len(pruned)} registry entries for swept files")
        return deleted_count
