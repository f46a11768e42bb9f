"""
Bearer Authentication Decorator

Resolves the caller from 'Authorization: Bearer <token>' before the view
runs and exposes it as flask.g.current_user.
"""

from functools import wraps

from flask import current_app, g, request

from quickscan.application.auth_service import AuthService
from quickscan.domain.errors import DomainError

from .responses import error_response


def bearer_auth_required(f):
    """
    Reject the request with an authentication envelope unless it carries a
    valid bearer token.

    Usage:
        class Me(Resource):
            @bearer_auth_required
            def get(self):
                return success_response(g.current_user.to_dict(), "...")
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            g.current_user = current_app.container.resolve(AuthService).current_user(
                request.headers.get("Authorization")
            )
        except DomainError as e:
            current_app.logger.info(f"Bearer authentication rejected on {request.path}: {e.message}")
            return error_response(e)
        return f(*args, **kwargs)

    return decorated_function
