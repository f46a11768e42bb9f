"""
Authentication Domain

In-memory credential store and bearer-token issuance/validation.
"""

from .credential_store import CredentialStore, hash_password, verify_password
from .entities import SessionClaims, User, UserRecord
from .token_service import TokenService

__all__ = [
    "CredentialStore",
    "SessionClaims",
    "TokenService",
    "User",
    "UserRecord",
    "hash_password",
    "verify_password",
]
