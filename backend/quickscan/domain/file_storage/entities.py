"""
File Storage Entities

Domain entities for uploaded file metadata.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class StorageType(Enum):
    """Backend a stored file belongs to, fixed when the file is stored."""

    TEMPORARY = "Temporary"
    SUPABASE = "Supabase"

    @classmethod
    def from_setting(cls, value: Optional[str]) -> "StorageType":
        """Map the STORAGE_TYPE setting to a backend, defaulting to local storage."""
        if value and value.strip().lower() == "supabase":
            return cls.SUPABASE
        return cls.TEMPORARY


@dataclass(frozen=True)
class StoredFile:
    """
    Entity representing an uploaded file.

    storage_path is the absolute local path for TEMPORARY files and the
    object key inside the bucket for SUPABASE files. The storage_type tag
    decides which backend serves every later operation on the file.
    """

    id: str
    filename: str
    file_size: int
    content_type: Optional[str]
    storage_path: str
    storage_type: StorageType
    timestamp: str
    download_url: Optional[str] = None

    @staticmethod
    def new_id() -> str:
        return str(uuid.uuid4())

    @staticmethod
    def now() -> str:
        return datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> dict:
        """Upload metadata as returned by the API."""
        return {
            "id": self.id,
            "filename": self.filename,
            "file_size": self.file_size,
            "content_type": self.content_type,
            "timestamp": self.timestamp,
            "status": "uploaded",
            "storage_type": self.storage_type.value,
            "download_url": self.download_url,
        }
