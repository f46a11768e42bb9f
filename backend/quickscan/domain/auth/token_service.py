"""
Token Service

Issues and validates signed, time-limited bearer tokens (HS256 JWT) and
authenticates callers presenting one of the static API tokens.
"""

import hmac
import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

import jwt

from ..errors import InvalidTokenError
from .entities import SessionClaims, UserRecord

logger = logging.getLogger(__name__)

DEFAULT_JWT_SECRET = "your-secret-key-change-this-in-production"
DEFAULT_EXPIRATION_HOURS = 24
DEFAULT_STATIC_TOKENS = (
    "quickscan-api-token-2024",
    "demo-token-12345",
    "test-api-key-abcdef",
)
STATIC_TOKEN_USER_EMAIL = "token-user@quickscan.app"
STATIC_CLAIM = "static"

JWT_ALGORITHM = "HS256"


class TokenService:
    """
    Stateless bearer-token issuer and validator.

    There is no revocation list and no refresh: a correctly signed token
    stays valid until its expiry.
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        expiration_hours: int = DEFAULT_EXPIRATION_HOURS,
        static_tokens: Optional[Iterable[str]] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize TokenService.

        Args:
            secret: Symmetric signing secret; a built-in development secret is used if empty
            expiration_hours: Token lifetime
            static_tokens: Allow-list for authenticate_static_token
            clock: Source of the current unix time, used when issuing
        """
        if not secret:
            logger.warning(
                "JWT_SECRET is not set - signing tokens with the built-in development "
                "secret. Do not deploy this configuration."
            )
            secret = DEFAULT_JWT_SECRET
        self._secret = secret
        self.expiration_hours = expiration_hours
        self.static_tokens = tuple(static_tokens if static_tokens is not None else DEFAULT_STATIC_TOKENS)
        self._clock = clock

    @property
    def uses_default_secret(self) -> bool:
        return self._secret == DEFAULT_JWT_SECRET

    def issue(self, user: UserRecord, extra_claims: Optional[Dict[str, Any]] = None) -> Tuple[str, str]:
        """
        Issue a signed token for a user.

        Args:
            user: Identity to embed
            extra_claims: Additional claims to carry in the payload

        Returns:
            Tuple of (token, RFC 3339 expiry timestamp)
        """
        iat = int(self._clock())
        exp = iat + self.expiration_hours * 3600
        claims = SessionClaims(sub=user.id, email=user.email, iat=iat, exp=exp, extra=extra_claims or {})

        token = jwt.encode(claims.to_payload(), self._secret, algorithm=JWT_ALGORITHM)
        return token, claims.expires_at.isoformat()

    def validate(self, token: str) -> SessionClaims:
        """
        Verify signature and expiry.

        Raises:
            InvalidTokenError: If the token is malformed, forged or expired
        """
        if not token:
            raise InvalidTokenError("Invalid token: empty token")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Invalid token: token has expired", e) from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}", e) from e

        return SessionClaims.from_payload(payload)

    def authenticate_static_token(self, token: str) -> UserRecord:
        """
        Check a static API token against the allow-list.

        On success a synthetic, non-persisted identity is returned; the
        credential store is never consulted.

        Raises:
            InvalidTokenError: If the token is not on the allow-list
        """
        candidate = (token or "").encode("utf-8")
        matched = False
        for allowed in self.static_tokens:
            if hmac.compare_digest(candidate, allowed.encode("utf-8")):
                matched = True

        if not matched:
            raise InvalidTokenError("Invalid API token")

        return UserRecord.synthetic(STATIC_TOKEN_USER_EMAIL)

    @staticmethod
    def is_static_identity(claims: SessionClaims) -> bool:
        """True when the claims were issued for a static-token caller."""
        return bool(claims.extra.get(STATIC_CLAIM))

    @staticmethod
    def record_from_claims(claims: SessionClaims) -> UserRecord:
        """Rebuild a synthetic user record from token claims."""
        issued = datetime.fromtimestamp(claims.iat, tz=timezone.utc).isoformat()
        return UserRecord(id=claims.sub, email=claims.email, created_at=issued, is_active=True)
