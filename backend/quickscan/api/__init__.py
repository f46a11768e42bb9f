"""
QuickScan REST API

This module mounts the flask-restx Api on the /api blueprint and registers
one namespace per area. Swagger UI is served at /api/docs.
"""

from flask import Blueprint, current_app
from flask_restx import Api
from werkzeug.exceptions import MethodNotAllowed, NotFound, RequestEntityTooLarge

from quickscan.domain.errors import ErrorCategory, create_error_response

api_bp = Blueprint("api", __name__, url_prefix="/api")

api = Api(
    api_bp,
    version="1.0",
    title="QuickScan API",
    description="Authentication, file upload storage and AI text analysis",
    doc="/docs",
    authorizations={"Bearer": {"type": "apiKey", "in": "header", "name": "Authorization"}},
)


@api.errorhandler(NotFound)
def not_found(e):
    return create_error_response(ErrorCategory.NOT_FOUND, "Resource not found")


@api.errorhandler(MethodNotAllowed)
def method_not_allowed(e):
    return create_error_response(ErrorCategory.BAD_REQUEST, "Method not allowed for this endpoint")


@api.errorhandler(RequestEntityTooLarge)
def request_too_large(e):
    limit_mb = current_app.quickscan_config.storage.max_upload_bytes // (1024 * 1024)
    message = f"File size exceeds {limit_mb}MB limit"
    return create_error_response(ErrorCategory.VALIDATION, message, validation_errors=[f"file: {message}"])


# Import namespaces after api is created to avoid circular imports
from .namespaces import (  # noqa: E402
    auth_ns,
    chat_ns,
    files_ns,
    health_ns,
    scans_ns,
    summarize_ns,
    upload_ns,
)

# Register namespaces
api.add_namespace(health_ns, path="/health")
api.add_namespace(auth_ns, path="/auth")
api.add_namespace(scans_ns, path="/scans")
api.add_namespace(upload_ns, path="/upload")
api.add_namespace(files_ns, path="/files")
api.add_namespace(summarize_ns, path="/summarize")
api.add_namespace(chat_ns, path="/chat")
