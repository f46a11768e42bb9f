"""
File Storage Repository Interface

Abstract interface for physical file storage operations.
This abstraction keeps the domain layer infrastructure-agnostic: the local
filesystem and the remote object store both implement it, and the storage
service picks one per stored file from the file's backend tag.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .entities import StorageType, StoredFile


class IFileStorageRepository(ABC):
    """
    Unified interface for file storage backends.

    Contract Guarantees:
    - store() assigns nothing itself: the caller passes the new file id
    - retrieve() raises StorageError when the bytes are gone
    - delete() raises on failure so callers can keep registry entries intact
    - get_download_url() never silently drops to a less secure URL without logging

    Thread Safety:
    - Implementations must be safe for concurrent calls from request threads
    """

    storage_type: StorageType

    @abstractmethod
    def store(
        self,
        file_id: str,
        filename: str,
        content_type: Optional[str],
        data: bytes,
    ) -> StoredFile:
        """
        Persist bytes and describe where they went.

        Args:
            file_id: Unique id assigned by the storage service
            filename: Original filename as uploaded (sanitized for the locator)
            content_type: Declared MIME type, if any
            data: File content

        Returns:
            StoredFile tagged with this backend's storage_type

        Raises:
            StorageError: Local write failure
            ExternalServiceError: Remote upload rejected
            ConfigurationError: Backend not configured
        """
        pass  # pragma: no cover

    @abstractmethod
    def retrieve(self, stored_file: StoredFile) -> bytes:
        """
        Read the bytes of a stored file.

        Raises:
            StorageError: If the bytes are missing or cannot be read
        """
        pass  # pragma: no cover

    @abstractmethod
    def delete(self, stored_file: StoredFile) -> None:
        """
        Remove the bytes of a stored file.

        Raises:
            StorageError / ExternalServiceError: If the backend delete fails
        """
        pass  # pragma: no cover

    @abstractmethod
    def get_download_url(self, stored_file: StoredFile, expires_in: int) -> str:
        """
        Produce a URL the client can download the file from.

        Args:
            stored_file: File to link to
            expires_in: Requested link lifetime in seconds

        Returns:
            Download URL string
        """
        pass  # pragma: no cover
