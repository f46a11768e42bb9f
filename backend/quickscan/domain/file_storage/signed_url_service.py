"""
Signed URL Service

Service for generating time-limited signed URLs for locally stored files.
Links carry an expiry timestamp and an HMAC-SHA256 signature over the
file id and that timestamp.
"""

import hashlib
import hmac
import secrets
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional
from urllib.parse import urlencode


@dataclass
class SignedUrl:
    """
    Represents a signed URL with expiration and validation.
    """

    url: str
    file_id: str
    expires: int
    signature: str

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.expires, tz=timezone.utc)


def derive_signing_key(secret: str, purpose: str = "quickscan-download-links") -> str:
    """Derive a purpose-bound HMAC key from an application secret."""
    return hmac.new(secret.encode("utf-8"), purpose.encode("utf-8"), hashlib.sha256).hexdigest()


class SignedUrlService:
    """
    Service for generating and validating signed download URLs.

    Provides time-limited access to the internal download endpoint of
    locally stored files.
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        base_url: str = "/api/files",
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize SignedUrlService.

        Args:
            secret_key: Secret key for HMAC signing (generated per process if not provided)
            base_url: Prefix of the download endpoint, '<base_url>/<id>/download'
            clock: Source of the current unix time
        """
        self.secret_key = secret_key or self._generate_secret_key()
        self.base_url = base_url.rstrip("/")
        self._clock = clock

    @staticmethod
    def _generate_secret_key(length: int = 32) -> str:
        """Generate a cryptographically secure secret key."""
        return secrets.token_hex(length)

    def generate_signed_url(self, file_id: str, ttl_seconds: int) -> SignedUrl:
        """
        Generate a signed URL for file access.

        Args:
            file_id: Registry id of the file
            ttl_seconds: Time to live in seconds

        Returns:
            SignedUrl object with URL and expiration information
        """
        expires = int(self._clock()) + int(ttl_seconds)
        signature = self._generate_signature(file_id, expires)
        query = urlencode({"expires": expires, "signature": signature})
        url = f"{self.base_url}/{file_id}/download?{query}"
        return SignedUrl(url=url, file_id=file_id, expires=expires, signature=signature)

    def _generate_signature(self, file_id: str, expires: int) -> str:
        """
        Generate HMAC signature for file id and expiration.

        Returns:
            HMAC signature as hex string
        """
        message = f"{file_id}:{expires}"
        return hmac.new(
            self.secret_key.encode("utf-8"), message.encode("utf-8"), hashlib.sha256
        ).hexdigest()

    def validate_signature(self, file_id: str, signature: str, expires: int) -> bool:
        """
        Validate HMAC signature for a file id.

        Returns:
            True if signature is valid, False otherwise
        """
        expected_signature = self._generate_signature(file_id, expires)

        # Use constant-time comparison to prevent timing attacks
        return hmac.compare_digest(signature, expected_signature)

    def is_expired(self, expires: int) -> bool:
        return self._clock() >= expires
