"""
Authentication Service

Orchestrates the credential store and the token service for the auth
endpoints: registration, password login, static-token login, token
verification and current-user lookup.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from quickscan.domain.auth import CredentialStore, SessionClaims, TokenService, UserRecord
from quickscan.domain.auth.token_service import STATIC_CLAIM
from quickscan.domain.errors import InvalidTokenError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class AuthResult:
    """User plus a freshly issued bearer token."""

    user: UserRecord
    token: str
    expires_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user": self.user.to_dict(),
            "token": self.token,
            "expires_at": self.expires_at,
        }


class AuthService:
    """Application service behind the /auth endpoints."""

    def __init__(self, credential_store: CredentialStore, token_service: TokenService):
        self.credential_store = credential_store
        self.token_service = token_service

    def register(self, email: str, password: str) -> AuthResult:
        """
        Register a new account and sign the caller in.

        Raises:
            UserAlreadyExistsError: If the email is taken
        """
        user = self.credential_store.register(email, password)
        logger.info(f"Registered user {user.id}")
        return self._issue(user)

    def login(self, email: str, password: str) -> AuthResult:
        """
        Raises:
            InvalidCredentialsError: Unknown email, wrong password or inactive account
        """
        user = self.credential_store.authenticate(email, password)
        logger.info(f"User {user.id} logged in")
        return self._issue(user)

    def token_login(self, api_token: str) -> AuthResult:
        """
        Exchange a static API token for a bearer token.

        Raises:
            InvalidTokenError: If the token is not on the allow-list
        """
        user = self.token_service.authenticate_static_token(api_token)
        logger.info("Static API token authentication succeeded")
        return self._issue(user, {STATIC_CLAIM: True})

    def verify(self, token: str) -> UserRecord:
        """
        Validate a bearer token and return its user.

        Raises:
            InvalidTokenError: Forged, malformed or expired token
            NotFoundError: Token subject is no longer in the store
        """
        claims = self.token_service.validate(token)
        return self._user_for_claims(claims)

    def current_user(self, authorization: Optional[str]) -> UserRecord:
        """
        Resolve the user from an Authorization header value.

        Raises:
            InvalidTokenError: Missing header, wrong scheme or bad token
        """
        if not authorization:
            raise InvalidTokenError("Missing Authorization header")
        if not authorization.startswith(BEARER_PREFIX):
            raise InvalidTokenError("Invalid Authorization header format")
        return self.verify(authorization[len(BEARER_PREFIX):].strip())

    def _user_for_claims(self, claims: SessionClaims) -> UserRecord:
        if self.token_service.is_static_identity(claims):
            return self.token_service.record_from_claims(claims)
        return self.credential_store.lookup_by_id(claims.sub)

    def _issue(self, user: UserRecord, extra_claims: Optional[Dict[str, Any]] = None) -> AuthResult:
        token, expires_at = self.token_service.issue(user, extra_claims)
        return AuthResult(user=user, token=token, expires_at=expires_at)
