"""
Scan Service

Scans are not persisted: creation runs an AI analysis and echoes a record,
reads return sample records.
"""

import logging
from typing import List, Optional

from quickscan.application.ai_service import AIService
from quickscan.domain.errors import DomainError
from quickscan.domain.scans import ScanRecord

logger = logging.getLogger(__name__)


class ScanService:
    def __init__(self, ai_service: Optional[AIService] = None):
        self.ai_service = ai_service

    def create_scan(self, data: str, scan_format: str = "text") -> ScanRecord:
        """
        Build a scan record, analysing the data when the AI service allows.

        Analysis failures are logged and leave the scan 'processed'.
        """
        status = "processed"
        if self.ai_service is not None:
            try:
                analysis = self.ai_service.analyze_scan(data, scan_format)
                status = "analyzed"
                logger.info(f"AI analysis: {analysis}")
            except DomainError as e:
                logger.warning(f"Failed to analyze scan data with AI: {e.message}")

        return ScanRecord(data=data, format=scan_format, status=status)

    def list_scans(self) -> List[ScanRecord]:
        return [
            ScanRecord(data="Sample scan 1", format="text", status="processed"),
            ScanRecord(data="Sample scan 2", format="qr", status="analyzed"),
        ]

    def get_scan(self, scan_id: str) -> ScanRecord:
        return ScanRecord(id=scan_id, data="Sample scan data", format="text", status="processed")

    def delete_scan(self, scan_id: str) -> str:
        logger.info(f"Deleting scan {scan_id}")
        return f"Scan {scan_id} deleted"
