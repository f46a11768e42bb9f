"""
Application Settings

Configuration classes read their values from the environment when they are
constructed. Keyword arguments override the environment, which is how tests
build isolated configurations.
"""

import os
import tempfile
from typing import List, Optional

from quickscan.domain.auth.token_service import DEFAULT_STATIC_TOKENS
from quickscan.domain.file_storage import StorageType

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: List[str]) -> List[str]:
    value = os.getenv(name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


class AuthConfig:
    """Token signing and password hashing settings."""

    def __init__(
        self,
        jwt_secret: Optional[str] = None,
        expiration_hours: Optional[int] = None,
        bcrypt_rounds: Optional[int] = None,
        static_tokens: Optional[List[str]] = None,
    ):
        self.jwt_secret = jwt_secret if jwt_secret is not None else os.getenv("JWT_SECRET")
        self.expiration_hours = (
            expiration_hours
            if expiration_hours is not None
            else int(os.getenv("JWT_EXPIRATION_HOURS", 24))
        )
        self.bcrypt_rounds = (
            bcrypt_rounds if bcrypt_rounds is not None else int(os.getenv("BCRYPT_ROUNDS", 12))
        )
        self.static_tokens = (
            list(static_tokens)
            if static_tokens is not None
            else _env_list("STATIC_API_TOKENS", list(DEFAULT_STATIC_TOKENS))
        )


class StorageConfig:
    """Upload storage settings for both backends."""

    def __init__(
        self,
        storage_type: Optional[str] = None,
        upload_dir: Optional[str] = None,
        supabase_url: Optional[str] = None,
        supabase_key: Optional[str] = None,
        supabase_bucket: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        max_upload_bytes: Optional[int] = None,
        download_url_ttl: Optional[int] = None,
        require_signed_downloads: Optional[bool] = None,
        cleanup_max_age_hours: Optional[float] = None,
        download_signing_secret: Optional[str] = None,
    ):
        self.storage_type = StorageType.from_setting(
            storage_type if storage_type is not None else os.getenv("STORAGE_TYPE", "temporary")
        )
        self.upload_dir = upload_dir or os.getenv(
            "UPLOAD_DIR", os.path.join(tempfile.gettempdir(), "quickscan_uploads")
        )

        self.supabase_url = (supabase_url or os.getenv("SUPABASE_URL") or "").rstrip("/")
        self.supabase_key = supabase_key or os.getenv("SUPABASE_ANON_KEY") or ""
        self.supabase_bucket = supabase_bucket or os.getenv("SUPABASE_BUCKET", "uploads")
        self.timeout_seconds = (
            timeout_seconds
            if timeout_seconds is not None
            else float(os.getenv("STORAGE_TIMEOUT_SECONDS", 30))
        )

        self.max_upload_bytes = (
            max_upload_bytes
            if max_upload_bytes is not None
            else int(os.getenv("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES))
        )
        self.download_url_ttl = (
            download_url_ttl
            if download_url_ttl is not None
            else int(os.getenv("DOWNLOAD_URL_TTL_SECONDS", 3600))
        )
        self.require_signed_downloads = (
            require_signed_downloads
            if require_signed_downloads is not None
            else _env_bool("REQUIRE_SIGNED_DOWNLOADS")
        )
        self.cleanup_max_age_hours = (
            cleanup_max_age_hours
            if cleanup_max_age_hours is not None
            else float(os.getenv("CLEANUP_MAX_AGE_HOURS", 24))
        )
        # Unset means a key derived from JWT_SECRET
        self.download_signing_secret = download_signing_secret or os.getenv("DOWNLOAD_SIGNING_SECRET") or None

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


class OpenAIConfig:
    """Chat-completion API settings."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else os.getenv("OPENAI_API_KEY", "")
        self.base_url = base_url or os.getenv("OPENAI_BASE_URL") or None
        self.model = model or os.getenv("OPENAI_MODEL", "gpt-4o-mini")
        self.timeout_seconds = (
            timeout_seconds
            if timeout_seconds is not None
            else float(os.getenv("OPENAI_TIMEOUT_SECONDS", 30))
        )


class AppConfig:
    """Application configuration."""

    def __init__(
        self,
        auth: Optional[AuthConfig] = None,
        storage: Optional[StorageConfig] = None,
        openai: Optional[OpenAIConfig] = None,
        testing: bool = False,
    ):
        self.host = os.getenv("HOST", "127.0.0.1")
        self.port = int(os.getenv("PORT", 3000))
        self.debug = _env_bool("FLASK_DEBUG")
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.testing = testing

        self.auth = auth or AuthConfig()
        self.storage = storage or StorageConfig()
        self.openai = openai or OpenAIConfig()
