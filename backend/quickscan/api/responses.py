"""
Response helpers producing the JSON envelope used by every endpoint.
"""

from typing import Any, Dict, Tuple

from quickscan.domain.errors import ApplicationError, DomainError, ErrorCategory, create_error_response


def success_response(data: Any, message: str, status_code: int = 200) -> Tuple[Dict[str, Any], int]:
    return {
        "success": True,
        "data": data,
        "message": message,
        "validation_errors": None,
    }, status_code


def error_response(error: DomainError) -> Tuple[Dict[str, Any], int]:
    """Envelope and status for a domain exception."""
    app_error = ApplicationError.from_domain_error(error)
    return app_error.to_dict(), app_error.status_code


def internal_error_response() -> Tuple[Dict[str, Any], int]:
    return create_error_response(ErrorCategory.INTERNAL)
