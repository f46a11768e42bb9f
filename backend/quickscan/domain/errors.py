"""
Error Handling Module

Defines domain exceptions and error categories for the application.
Domain exceptions are pure and have no external dependencies.
Application exceptions bridge them to user-facing messages and HTTP responses.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCategory(Enum):
    """Error category enumeration for structured error handling."""

    VALIDATION = "validation_error"
    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    AUTHENTICATION = "authentication_error"
    AUTHORIZATION = "authorization_error"
    EXTERNAL_SERVICE = "external_service_error"
    STORAGE = "storage_error"
    CONFIGURATION = "configuration_error"
    TIMEOUT = "timeout_error"
    RATE_LIMIT = "rate_limit_error"
    INTERNAL = "internal_error"


# Fixed HTTP status per category
ERROR_STATUS_CODES: Dict[ErrorCategory, int] = {
    ErrorCategory.VALIDATION: 400,
    ErrorCategory.BAD_REQUEST: 400,
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.AUTHENTICATION: 401,
    ErrorCategory.AUTHORIZATION: 403,
    ErrorCategory.EXTERNAL_SERVICE: 502,
    ErrorCategory.STORAGE: 500,
    ErrorCategory.CONFIGURATION: 500,
    ErrorCategory.TIMEOUT: 408,
    ErrorCategory.RATE_LIMIT: 429,
    ErrorCategory.INTERNAL: 500,
}


# User-friendly titles and default messages
ERROR_MESSAGES: Dict[ErrorCategory, Dict[str, str]] = {
    ErrorCategory.VALIDATION: {
        "title": "Validation Failed",
        "message": "The request contains invalid data.",
    },
    ErrorCategory.BAD_REQUEST: {
        "title": "Bad Request",
        "message": "The request could not be understood.",
    },
    ErrorCategory.NOT_FOUND: {
        "title": "Not Found",
        "message": "The requested resource could not be found.",
    },
    ErrorCategory.AUTHENTICATION: {
        "title": "Authentication Failed",
        "message": "Valid credentials are required.",
    },
    ErrorCategory.AUTHORIZATION: {
        "title": "Access Denied",
        "message": "You are not allowed to access this resource.",
    },
    ErrorCategory.EXTERNAL_SERVICE: {
        "title": "External Service Error",
        "message": "An upstream service failed to handle the request.",
    },
    ErrorCategory.STORAGE: {
        "title": "Storage Error",
        "message": "The file could not be read from or written to storage.",
    },
    ErrorCategory.CONFIGURATION: {
        "title": "Configuration Error",
        "message": "The server is missing required configuration.",
    },
    ErrorCategory.TIMEOUT: {
        "title": "Request Timeout",
        "message": "An upstream service did not respond in time.",
    },
    ErrorCategory.RATE_LIMIT: {
        "title": "Too Many Requests",
        "message": "Rate limit exceeded.",
    },
    ErrorCategory.INTERNAL: {
        "title": "Internal Server Error",
        "message": "An unexpected error occurred while processing your request.",
    },
}


# ============================================================================
# Domain Exceptions (Pure - No External Dependencies)
# ============================================================================

class DomainError(Exception):
    """
    Base exception for all domain errors.

    Each subclass pins the ErrorCategory it surfaces as. Domain errors can
    optionally wrap the original error for context.
    """

    category = ErrorCategory.INTERNAL

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        """
        Initialize domain error.

        Args:
            message: Error message
            original_error: Optional original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class RequestValidationError(DomainError):
    """Raised when a request body fails its declared field constraints."""

    category = ErrorCategory.VALIDATION

    def __init__(self, message: str = "Validation failed", errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


class NotFoundError(DomainError):
    """Raised when a looked-up resource does not exist."""

    category = ErrorCategory.NOT_FOUND


class UserAlreadyExistsError(DomainError):
    """Raised when registering an email that is already present."""

    category = ErrorCategory.VALIDATION


class InvalidCredentialsError(DomainError):
    """
    Raised when email/password authentication fails.

    Unknown email, wrong password and inactive account all raise this
    with the same message.
    """

    category = ErrorCategory.AUTHENTICATION

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class InvalidTokenError(DomainError):
    """Raised when a bearer or static API token is rejected."""

    category = ErrorCategory.AUTHENTICATION


class AccessDeniedError(DomainError):
    """Raised when a signed download link is forged, expired or missing."""

    category = ErrorCategory.AUTHORIZATION


class StorageError(DomainError):
    """Raised when local storage I/O fails or stored bytes are missing."""

    category = ErrorCategory.STORAGE


class ExternalServiceError(DomainError):
    """Raised when the remote object store or the LLM API returns a failure."""

    category = ErrorCategory.EXTERNAL_SERVICE


class ServiceTimeoutError(DomainError):
    """Raised when an outbound call exceeds its configured timeout."""

    category = ErrorCategory.TIMEOUT


class ConfigurationError(DomainError):
    """Raised when required configuration is missing or invalid."""

    category = ErrorCategory.CONFIGURATION


# ============================================================================
# Application Layer Exceptions
# ============================================================================

class ApplicationError(Exception):
    """
    Application error with category and user-facing messaging.

    Bridges domain errors with the JSON error envelope and HTTP status.
    """

    def __init__(
        self,
        category: ErrorCategory,
        technical_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        validation_errors: Optional[List[str]] = None,
    ):
        """
        Initialize application error.

        Args:
            category: Error category
            technical_message: Message shown to the caller, falls back to the category default
            context: Additional context information
            validation_errors: Field-level messages for validation failures
        """
        self.category = category
        self.context = context or {}
        self.validation_errors = validation_errors

        error_info = ERROR_MESSAGES.get(category, ERROR_MESSAGES[ErrorCategory.INTERNAL])
        self.title = error_info["title"]
        self.message = technical_message or error_info["message"]
        self.status_code = ERROR_STATUS_CODES.get(category, 500)

        super().__init__(self.message)

    @classmethod
    def from_domain_error(cls, error: DomainError) -> "ApplicationError":
        """Build the application error matching a domain exception."""
        return cls(
            error.category,
            error.message,
            validation_errors=getattr(error, "errors", None),
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to the response envelope.

        Returns:
            Dictionary with envelope fields and error details
        """
        return {
            "success": False,
            "data": None,
            "message": self.message,
            "validation_errors": self.validation_errors,
            "error": {
                "type": self.category.value,
                "title": self.title,
                "message": self.message,
                "status": self.status_code,
            },
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


def create_error_response(
    category: ErrorCategory,
    technical_message: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None,
    validation_errors: Optional[List[str]] = None,
) -> tuple[Dict[str, Any], int]:
    """
    Create a structured error response for API endpoints.

    Args:
        category: Error category
        technical_message: Message shown to the caller
        context: Additional context information
        validation_errors: Field-level messages for validation failures

    Returns:
        Tuple of (error_dict, status_code)
    """
    error = ApplicationError(category, technical_message, context, validation_errors)
    return error.to_dict(), error.status_code
