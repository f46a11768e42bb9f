"""
File Storage Domain

Handles uploaded file metadata, the in-memory registry, signed download
links and expiry sweeping.
"""

from .entities import StorageType, StoredFile
from .expiry_sweeper import ExpirySweeper
from .file_registry import FileRegistry, ReadWriteLock
from .signed_url_service import SignedUrl, SignedUrlService, derive_signing_key
from .storage_repository import IFileStorageRepository
from .value_objects import local_file_name, object_key, sanitize_filename

__all__ = [
    "ExpirySweeper",
    "FileRegistry",
    "IFileStorageRepository",
    "ReadWriteLock",
    "SignedUrl",
    "SignedUrlService",
    "StorageType",
    "StoredFile",
    "derive_signing_key",
    "local_file_name",
    "object_key",
    "sanitize_filename",
]
