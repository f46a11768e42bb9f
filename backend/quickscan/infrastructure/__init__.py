"""
Infrastructure Layer

Concrete storage backends, the storage dispatcher and the LLM client.
"""

from .local_file_storage_repository import LocalFileStorageRepository
from .openai_completion_client import OpenAICompletionClient
from .storage_factory import StorageFactory
from .storage_service import StorageService
from .supabase_storage_repository import SupabaseStorageRepository

__all__ = [
    "LocalFileStorageRepository",
    "OpenAICompletionClient",
    "StorageFactory",
    "StorageService",
    "SupabaseStorageRepository",
]
