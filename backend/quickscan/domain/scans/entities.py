"""
Scan Entities

Scan records are returned to the caller but never stored.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

SCAN_FORMATS = ("text", "qr", "barcode", "ocr")


@dataclass(frozen=True)
class ScanRecord:
    data: str
    format: str = "text"
    status: str = "processed"
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "data": self.data,
            "format": self.format,
            "timestamp": self.timestamp,
            "status": self.status,
        }
