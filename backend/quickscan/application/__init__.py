"""
Application Layer

Services orchestrating the domain for the HTTP API.
"""

from .ai_service import AIService
from .auth_service import AuthResult, AuthService
from .dependency_container import DependencyContainer, DependencyNotFoundError
from .file_service import DownloadLink, FileService
from .scan_service import ScanService

__all__ = [
    "AIService",
    "AuthResult",
    "AuthService",
    "DependencyContainer",
    "DependencyNotFoundError",
    "DownloadLink",
    "FileService",
    "ScanService",
]
