"""
Unit tests for the authentication application service.
"""

import pytest

from quickscan.application import AuthService
from quickscan.domain.auth import CredentialStore, TokenService
from quickscan.domain.auth.token_service import STATIC_TOKEN_USER_EMAIL
from quickscan.domain.errors import InvalidCredentialsError, InvalidTokenError, NotFoundError, UserAlreadyExistsError


@pytest.fixture
def auth_service():
    return AuthService(
        CredentialStore(bcrypt_rounds=4),
        TokenService(secret="unit-secret", static_tokens=["static-abc"]),
    )


class TestRegisterAndLogin:
    def test_register_issues_token(self, auth_service):
        result = auth_service.register("ada@example.com", "password123")

        assert result.user.email == "ada@example.com"
        assert auth_service.verify(result.token).id == result.user.id
        assert set(result.to_dict()) == {"user", "token", "expires_at"}

    def test_register_twice_fails(self, auth_service):
        auth_service.register("ada@example.com", "password123")

        with pytest.raises(UserAlreadyExistsError):
            auth_service.register("ada@example.com", "password123")

    def test_login(self, auth_service):
        registered = auth_service.register("ada@example.com", "password123")

        result = auth_service.login("ada@example.com", "password123")

        assert result.user.id == registered.user.id

    def test_login_failures(self, auth_service):
        auth_service.register("ada@example.com", "password123")

        with pytest.raises(InvalidCredentialsError):
            auth_service.login("ada@example.com", "nope-nope")
        with pytest.raises(InvalidCredentialsError):
            auth_service.login("bob@example.com", "password123")


class TestStaticTokens:
    def test_token_login_and_verify_return_synthetic_user(self, auth_service):
        result = auth_service.token_login("static-abc")

        user = auth_service.verify(result.token)

        assert user.email == STATIC_TOKEN_USER_EMAIL
        assert user.id == result.user.id
        assert len(auth_service.credential_store) == 0

    def test_unknown_static_token(self, auth_service):
        with pytest.raises(InvalidTokenError):
            auth_service.token_login("nope")


class TestCurrentUser:
    def test_bearer_header(self, auth_service):
        result = auth_service.register("ada@example.com", "password123")

        assert auth_service.current_user(f"Bearer {result.token}").email == "ada@example.com"

    @pytest.mark.parametrize("header", [None, "", "Token abc", "bearer abc"])
    def test_bad_headers(self, auth_service, header):
        with pytest.raises(InvalidTokenError):
            auth_service.current_user(header)

    def test_token_for_unknown_user(self, auth_service):
        other = AuthService(CredentialStore(bcrypt_rounds=4), auth_service.token_service)
        result = other.register("ghost@example.com", "password123")

        with pytest.raises(NotFoundError):
            auth_service.verify(result.token)
