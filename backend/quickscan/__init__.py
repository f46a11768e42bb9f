"""
QuickScan backend

Authentication, file upload storage and LLM text-analysis API.
"""

__version__ = "1.0.0"
