"""
Application Factory

Creates and configures the Flask application with all dependencies.
The factory takes an optional AppConfig so tests can build isolated apps
with their own upload directory and collaborators.
"""

import logging
from typing import Optional

import click
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import MethodNotAllowed, NotFound, RequestEntityTooLarge

from quickscan.application import AIService, AuthService, DependencyContainer, FileService, ScanService
from quickscan.config import AppConfig
from quickscan.domain.analysis import ICompletionClient
from quickscan.domain.auth import CredentialStore, TokenService
from quickscan.domain.errors import ErrorCategory, create_error_response
from quickscan.domain.file_storage import ExpirySweeper, FileRegistry, SignedUrlService, derive_signing_key
from quickscan.infrastructure import OpenAICompletionClient, StorageFactory, StorageService

logger = logging.getLogger(__name__)

# Room for multipart boundaries and headers on top of the file size limit
MULTIPART_OVERHEAD_BYTES = 64 * 1024


def create_app(
    config: Optional[AppConfig] = None,
    completion_client: Optional[ICompletionClient] = None,
) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Application configuration, read from the environment if None
        completion_client: LLM client override, built from config if None

    Returns:
        Configured Flask application

    Raises:
        ConfigurationError: If the selected storage backend is not configured
    """
    if config is None:
        config = AppConfig()

    app = Flask(__name__)
    app.config["TESTING"] = config.testing
    # The upload endpoint checks the exact limit; this only stops oversized bodies early
    app.config["MAX_CONTENT_LENGTH"] = config.storage.max_upload_bytes + MULTIPART_OVERHEAD_BYTES
    app.config["RESTX_ERROR_404_HELP"] = False
    app.quickscan_config = config

    CORS(
        app,
        resources={
            r"/*": {
                "origins": "*",
                "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
                "allow_headers": ["Content-Type", "Authorization"],
                "max_age": 3600,
            }
        },
    )

    _initialize_services(app, config, completion_client)
    _register_blueprints(app)
    _register_health_endpoint(app)
    _register_error_handlers(app)
    _register_cli_commands(app)

    return app


def _initialize_services(
    app: Flask,
    config: AppConfig,
    completion_client: Optional[ICompletionClient],
) -> None:
    """
    Build every service, register it in the DependencyContainer and attach
    the commonly used ones directly to the app for request handlers.
    """
    container = DependencyContainer()

    # Authentication
    credential_store = CredentialStore(bcrypt_rounds=config.auth.bcrypt_rounds)
    token_service = TokenService(
        secret=config.auth.jwt_secret,
        expiration_hours=config.auth.expiration_hours,
        static_tokens=config.auth.static_tokens,
    )
    container.register_singleton(CredentialStore, credential_store)
    container.register_singleton(TokenService, token_service)

    # File storage
    signing_key = config.storage.download_signing_secret
    if signing_key is None and config.auth.jwt_secret:
        signing_key = derive_signing_key(config.auth.jwt_secret)
    signed_url_service = SignedUrlService(secret_key=signing_key)
    storage_service = StorageFactory.create_storage_service(config.storage, signed_url_service)
    file_registry = FileRegistry()
    sweeper = ExpirySweeper(config.storage.storage_type, config.storage.upload_dir)
    container.register_singleton(SignedUrlService, signed_url_service)
    container.register_singleton(StorageService, storage_service)
    container.register_singleton(FileRegistry, file_registry)
    container.register_singleton(ExpirySweeper, sweeper)

    # LLM
    if completion_client is None:
        completion_client = OpenAICompletionClient(
            api_key=config.openai.api_key,
            base_url=config.openai.base_url,
            default_model=config.openai.model,
            timeout=config.openai.timeout_seconds,
        )
    container.register_singleton(ICompletionClient, completion_client)

    # Application services
    auth_service = AuthService(credential_store, token_service)
    file_service = FileService(
        file_registry,
        storage_service,
        signed_url_service,
        sweeper,
        max_upload_bytes=config.storage.max_upload_bytes,
        download_url_ttl=config.storage.download_url_ttl,
        require_signed_downloads=config.storage.require_signed_downloads,
        cleanup_max_age_hours=config.storage.cleanup_max_age_hours,
    )
    ai_service = AIService(completion_client)
    scan_service = ScanService(ai_service)

    container.register_singleton(AuthService, auth_service)
    container.register_singleton(FileService, file_service)
    container.register_singleton(AIService, ai_service)
    container.register_singleton(ScanService, scan_service)

    app.container = container
    app.auth_service = auth_service
    app.file_service = file_service
    app.ai_service = ai_service
    app.scan_service = scan_service

    logger.info(f"Application services initialized ({len(container)} registrations)")


def _register_blueprints(app: Flask) -> None:
    from quickscan.api import api_bp

    app.register_blueprint(api_bp)


def _register_health_endpoint(app: Flask) -> None:
    from quickscan.api.namespaces import health_status

    @app.route("/health", methods=["GET"])
    def health():
        """Liveness probe outside the /api prefix."""
        return jsonify(health_status()), 200


def _register_error_handlers(app: Flask) -> None:
    """Answer framework-level errors outside the restx Api with the JSON envelope."""

    @app.errorhandler(RequestEntityTooLarge)
    def request_too_large(e):
        limit_mb = app.quickscan_config.storage.max_upload_bytes // (1024 * 1024)
        message = f"File size exceeds {limit_mb}MB limit"
        return create_error_response(ErrorCategory.VALIDATION, message, validation_errors=[f"file: {message}"])

    @app.errorhandler(NotFound)
    def not_found(e):
        return create_error_response(ErrorCategory.NOT_FOUND, "Resource not found")

    @app.errorhandler(MethodNotAllowed)
    def method_not_allowed(e):
        return create_error_response(ErrorCategory.BAD_REQUEST, "Method not allowed for this endpoint")


def _register_cli_commands(app: Flask) -> None:
    @app.cli.command("cleanup-files")
    @click.option("--max-age-hours", type=float, default=None, help="Delete uploads older than this")
    def cleanup_files(max_age_hours):
        """Delete expired local uploads."""
        deleted_count = app.container.resolve(FileService).cleanup(max_age_hours)
        click.echo(f"Cleaned up {deleted_count} expired files")
