"""
Supabase Storage Repository

Infrastructure layer for remote object storage through the Supabase
Storage REST API. Objects are addressed as '<id>/<sanitized name>' inside
one bucket; every call carries the configured key as a bearer token.
"""

import logging
from typing import Any, Dict, Optional

import requests

from quickscan.domain.errors import (
    ConfigurationError,
    ExternalServiceError,
    ServiceTimeoutError,
    StorageError,
)
from quickscan.domain.file_storage import (
    IFileStorageRepository,
    StorageType,
    StoredFile,
    object_key,
)

logger = logging.getLogger(__name__)


class SupabaseStorageRepository(IFileStorageRepository):
    """
    Supabase Storage implementation of IFileStorageRepository.

    Handles uploads, downloads, deletes and signed URL generation.
    Outbound calls use the configured timeout and are never retried.
    """

    storage_type = StorageType.SUPABASE

    def __init__(
        self,
        supabase_url: str,
        api_key: str,
        bucket: str = "uploads",
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize Supabase repository.

        Args:
            supabase_url: Project URL, e.g. https://xyz.supabase.co
            api_key: Anon or service key sent as bearer token
            bucket: Bucket holding uploaded objects
            timeout: Per-request timeout in seconds
            session: Optional requests session (tests inject a mock)

        Raises:
            ConfigurationError: If URL or key is missing
        """
        if not supabase_url or not api_key:
            raise ConfigurationError(
                "Supabase storage selected but SUPABASE_URL / SUPABASE_ANON_KEY are not set"
            )
        self.supabase_url = supabase_url.rstrip("/")
        self.api_key = api_key
        self.bucket = bucket
        self.timeout = timeout
        self.session = session or requests.Session()

    def _object_url(self, key: str) -> str:
        return f"{self.supabase_url}/storage/v1/object/{self.bucket}/{key}"

    def public_url(self, key: str) -> str:
        return f"{self.supabase_url}/storage/v1/object/public/{self.bucket}/{key}"

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Issue one HTTP call with the configured timeout.

        Raises:
            ServiceTimeoutError: If the call times out
            ExternalServiceError: On connection-level failures
        """
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.Timeout as e:
            logger.error(f"Supabase {method} timed out after {self.timeout}s: {url}")
            raise ServiceTimeoutError(f"Storage request timed out after {self.timeout} seconds", e) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Supabase {method} failed: {e}")
            raise ExternalServiceError(f"Storage request failed: {e}", e) from e

    def store(
        self,
        file_id: str,
        filename: str,
        content_type: Optional[str],
        data: bytes,
    ) -> StoredFile:
        key = object_key(file_id, filename)
        headers = self._auth_headers()
        if content_type:
            headers["Content-Type"] = content_type

        response = self._request("POST", self._object_url(key), headers=headers, data=data)
        if not response.ok:
            raise ExternalServiceError(f"Supabase upload failed: {response.text}")

        logger.info(f"Uploaded {len(data)} bytes to Supabase bucket {self.bucket} as {key}")
        return StoredFile(
            id=file_id,
            filename=filename,
            file_size=len(data),
            content_type=content_type,
            storage_path=key,
            storage_type=self.storage_type,
            timestamp=StoredFile.now(),
            download_url=self.public_url(key),
        )

    def retrieve(self, stored_file: StoredFile) -> bytes:
        if not stored_file.download_url:
            raise StorageError("No download URL available for Supabase file")

        response = self._request("GET", stored_file.download_url)
        if not response.ok:
            raise StorageError(f"Failed to download file: HTTP {response.status_code}")
        return response.content

    def delete(self, stored_file: StoredFile) -> None:
        response = self._request(
            "DELETE", self._object_url(stored_file.storage_path), headers=self._auth_headers()
        )
        if not response.ok:
            raise ExternalServiceError(f"Supabase delete failed: {response.text}")

    def get_download_url(self, stored_file: StoredFile, expires_in: int) -> str:
        """
        Request a short-lived signed URL, falling back to the public URL.

        The fallback keeps the endpoint available when signing fails, at the
        cost of handing out a link that does not expire.
        """
        key = stored_file.storage_path
        sign_url = f"{self.supabase_url}/storage/v1/object/sign/{self.bucket}/{key}"

        try:
            response = self._request(
                "POST",
                sign_url,
                headers=self._auth_headers(),
                params={"expiresIn": int(expires_in)},
            )
            if response.ok:
                body = response.json()
                signed_path = body.get("signedURL") if isinstance(body, dict) else None
                if signed_path:
                    return f"{self.supabase_url}{signed_path}"
                reason = "response carried no signedURL"
            else:
                reason = f"HTTP {response.status_code}"
        except (ExternalServiceError, ServiceTimeoutError, ValueError) as e:
            reason = str(e)

        logger.warning(
            f"Degraded security: could not sign URL for file {stored_file.id} ({reason}); "
            f"returning non-expiring public URL"
        )
        return stored_file.download_url or self.public_url(key)
