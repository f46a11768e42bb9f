"""
Scans Domain

Non-persistent scan records.
"""

from .entities import SCAN_FORMATS, ScanRecord

__all__ = ["SCAN_FORMATS", "ScanRecord"]
