"""
Unified Storage Service

Routes every storage operation to the backend a file was stored with.
"""

import logging
from typing import Dict, Optional

from quickscan.domain.errors import ConfigurationError
from quickscan.domain.file_storage import IFileStorageRepository, StorageType, StoredFile

logger = logging.getLogger(__name__)


class StorageService:
    """
    Backend dispatcher keyed on StorageType.

    New files go to the active backend. Every later operation (retrieve,
    delete, download URL) uses the backend named by the file's own
    storage_type tag, never the active setting, so files stored before a
    configuration change stay reachable.
    """

    def __init__(
        self,
        backends: Dict[StorageType, IFileStorageRepository],
        active_type: StorageType,
    ):
        if active_type not in backends:
            raise ConfigurationError(f"Active storage backend {active_type.value} is not configured")
        self._backends = dict(backends)
        self.active_type = active_type

    def backend_for(self, storage_type: StorageType) -> IFileStorageRepository:
        """
        Return the backend for a storage tag.

        Raises:
            ConfigurationError: If no backend is registered for the tag
        """
        backend = self._backends.get(storage_type)
        if backend is None:
            raise ConfigurationError(f"Storage backend {storage_type.value} is not configured")
        return backend

    def store(self, filename: str, content_type: Optional[str], data: bytes) -> StoredFile:
        """Store bytes in the active backend under a fresh id."""
        file_id = StoredFile.new_id()
        return self.backend_for(self.active_type).store(file_id, filename, content_type, data)

    def retrieve(self, stored_file: StoredFile) -> bytes:
        return self.backend_for(stored_file.storage_type).retrieve(stored_file)

    def delete(self, stored_file: StoredFile) -> None:
        self.backend_for(stored_file.storage_type).delete(stored_file)

    def get_download_url(self, stored_file: StoredFile, expires_in: int) -> str:
        return self.backend_for(stored_file.storage_type).get_download_url(stored_file, expires_in)

    def local_file_exists(self, stored_file: StoredFile) -> bool:
        """True unless a Temporary file's bytes are gone from disk."""
        if stored_file.storage_type is not StorageType.TEMPORARY:
            return True
        return self.backend_for(StorageType.TEMPORARY).exists(stored_file)
