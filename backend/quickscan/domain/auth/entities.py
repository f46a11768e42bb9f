"""
Authentication Entities

Domain entities for user accounts and session claims.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class User:
    """
    Entity representing a registered user.

    Holds the password hash, so it never leaves the credential store;
    callers receive a UserRecord projection instead.
    """

    id: str
    email: str
    password_hash: str
    created_at: str
    updated_at: str
    is_active: bool = True

    @classmethod
    def create(cls, email: str, password_hash: str) -> "User":
        """
        Factory method to create a new active user.

        Args:
            email: Unique email address
            password_hash: bcrypt hash of the password

        Returns:
            New User instance
        """
        now = _now_iso()
        return cls(
            id=str(uuid.uuid4()),
            email=email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )

    def to_record(self) -> "UserRecord":
        """Public-safe projection without the password hash."""
        return UserRecord(
            id=self.id,
            email=self.email,
            created_at=self.created_at,
            is_active=self.is_active,
        )


@dataclass(frozen=True)
class UserRecord:
    """Public projection of a user, safe to serialize into responses."""

    id: str
    email: str
    created_at: str
    is_active: bool = True

    @classmethod
    def synthetic(cls, email: str) -> "UserRecord":
        """Non-persisted identity used for static API token callers."""
        return cls(id=str(uuid.uuid4()), email=email, created_at=_now_iso(), is_active=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "email": self.email,
            "created_at": self.created_at,
            "is_active": self.is_active,
        }


@dataclass(frozen=True)
class SessionClaims:
    """
    Claims carried inside a signed bearer token.

    Not stored server-side; validity depends only on signature and expiry.
    """

    sub: str
    email: str
    iat: int
    exp: int
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, tz=timezone.utc)

    def to_payload(self) -> Dict[str, Any]:
        """Convert to the JWT payload."""
        payload = dict(self.extra)
        payload.update({"sub": self.sub, "email": self.email, "iat": self.iat, "exp": self.exp})
        return payload

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "SessionClaims":
        """Create claims from a decoded JWT payload."""
        extra = {k: v for k, v in payload.items() if k not in ("sub", "email", "iat", "exp")}
        return cls(
            sub=str(payload["sub"]),
            email=payload.get("email", ""),
            iat=int(payload.get("iat", 0)),
            exp=int(payload["exp"]),
            extra=extra,
        )
