"""
Credential Store

In-memory mapping of email to user record with bcrypt password hashing.
Contents live only for the lifetime of the process.
"""

import logging
import threading
from typing import Dict, Optional

import bcrypt

from ..errors import InvalidCredentialsError, NotFoundError, UserAlreadyExistsError
from .entities import User, UserRecord

logger = logging.getLogger(__name__)

DEFAULT_BCRYPT_ROUNDS = 12


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash a password using bcrypt"""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash"""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash
        return False


class CredentialStore:
    """
    Process-local user registry keyed by email.

    Emails are matched case-sensitively. Registration is an atomic
    insert-if-absent; lookups need no locking beyond the dict itself.
    """

    def __init__(self, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS):
        """
        Initialize an empty store.

        Args:
            bcrypt_rounds: bcrypt cost factor (12 is roughly 100-250ms per verify)
        """
        self._users: Dict[str, User] = {}
        self._ids: Dict[str, str] = {}
        self._lock = threading.Lock()
        self.bcrypt_rounds = bcrypt_rounds

    def register(self, email: str, password: str) -> UserRecord:
        """
        Register a new user.

        Args:
            email: Unique email address
            password: Plain-text password, hashed before storage

        Returns:
            Public projection of the created user

        Raises:
            UserAlreadyExistsError: If the email is already registered
        """
        if email in self._users:
            raise UserAlreadyExistsError("User already exists")

        # Hash outside the lock, bcrypt is deliberately slow
        user = User.create(email, hash_password(password, self.bcrypt_rounds))

        with self._lock:
            if email in self._users:
                raise UserAlreadyExistsError("User already exists")
            self._users[email] = user
            self._ids[user.id] = email

        logger.info(f"Registered user {user.id}")
        return user.to_record()

    def authenticate(self, email: str, password: str) -> UserRecord:
        """
        Verify an email/password pair.

        Raises:
            InvalidCredentialsError: Unknown email, wrong password or inactive account
        """
        user = self._users.get(email)
        if user is None:
            raise InvalidCredentialsError()

        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        if not user.is_active:
            logger.info(f"Rejected login for inactive user {user.id}")
            raise InvalidCredentialsError()

        return user.to_record()

    def lookup_by_id(self, user_id: str) -> UserRecord:
        """
        Raises:
            NotFoundError: If no user has this id
        """
        email = self._ids.get(user_id)
        user = self._users.get(email) if email is not None else None
        if user is None:
            raise NotFoundError("User not found")
        return user.to_record()

    def lookup_by_email(self, email: str) -> UserRecord:
        """
        Raises:
            NotFoundError: If no user has this email
        """
        user = self._users.get(email)
        if user is None:
            raise NotFoundError("User not found")
        return user.to_record()

    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        """Like lookup_by_id but returns None instead of raising."""
        try:
            return self.lookup_by_id(user_id)
        except NotFoundError:
            return None

    def __len__(self) -> int:
        return len(self._users)
