"""
Storage Factory

Builds the storage backends and the dispatching StorageService from the
storage configuration.

The local filesystem backend is always registered so that Temporary files
remain servable whichever backend is active. The Supabase backend is
registered whenever it is configured, and is required when it is the
active backend.
"""

import logging
from typing import Dict, Optional

import requests

from quickscan.config.settings import StorageConfig
from quickscan.domain.errors import ConfigurationError
from quickscan.domain.file_storage import IFileStorageRepository, SignedUrlService, StorageType
from quickscan.infrastructure.local_file_storage_repository import LocalFileStorageRepository
from quickscan.infrastructure.storage_service import StorageService
from quickscan.infrastructure.supabase_storage_repository import SupabaseStorageRepository

logger = logging.getLogger(__name__)


class StorageFactory:
    """Factory for the storage service and its backends."""

    @staticmethod
    def create_storage_service(
        config: StorageConfig,
        signed_url_service: SignedUrlService,
        session: Optional[requests.Session] = None,
    ) -> StorageService:
        """
        Create the storage service.

        Args:
            config: Storage settings
            signed_url_service: Signer for local download links
            session: Optional HTTP session for the Supabase backend

        Returns:
            StorageService dispatching on each file's storage tag

        Raises:
            ConfigurationError: If Supabase is selected but not configured
        """
        backends: Dict[StorageType, IFileStorageRepository] = {
            StorageType.TEMPORARY: LocalFileStorageRepository(config.upload_dir, signed_url_service),
        }

        if config.supabase_configured:
            backends[StorageType.SUPABASE] = SupabaseStorageRepository(
                config.supabase_url,
                config.supabase_key,
                bucket=config.supabase_bucket,
                timeout=config.timeout_seconds,
                session=session,
            )
        elif config.storage_type is StorageType.SUPABASE:
            raise ConfigurationError(
                "STORAGE_TYPE=supabase requires SUPABASE_URL and SUPABASE_ANON_KEY"
            )

        service = StorageService(backends, config.storage_type)

        if config.storage_type is StorageType.SUPABASE:
            logger.info(f"Storage: using Supabase bucket '{config.supabase_bucket}'")
        else:
            logger.info(f"Storage: using local filesystem at {config.upload_dir}")
        return service
