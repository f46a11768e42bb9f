"""
Configuration

Environment-driven settings and logging setup.
"""

from .logging_config import configure_logging
from .settings import AppConfig, AuthConfig, OpenAIConfig, StorageConfig

__all__ = [
    "AppConfig",
    "AuthConfig",
    "OpenAIConfig",
    "StorageConfig",
    "configure_logging",
]
