"""
Shared pytest fixtures and configuration for the QuickScan backend test suite.

This module provides:
- Hypothesis configuration for property-based testing
- Environment isolation from the developer's .env
- Configured apps and test clients backed by a temporary upload directory
- A scripted completion client standing in for the OpenAI API
"""

from typing import List, Optional

import pytest
from hypothesis import HealthCheck, Phase, settings

from app_factory import create_app
from quickscan.config import AppConfig, AuthConfig, OpenAIConfig, StorageConfig
from quickscan.domain.analysis import ChatCompletion, CompletionRequest, ICompletionClient, TokenUsage
from quickscan.domain.errors import DomainError

# Register Hypothesis profiles
settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
)
settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.load_profile("default")


QUICKSCAN_ENV_VARS = (
    "JWT_SECRET",
    "JWT_EXPIRATION_HOURS",
    "BCRYPT_ROUNDS",
    "STATIC_API_TOKENS",
    "STORAGE_TYPE",
    "UPLOAD_DIR",
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "SUPABASE_BUCKET",
    "STORAGE_TIMEOUT_SECONDS",
    "MAX_UPLOAD_BYTES",
    "DOWNLOAD_URL_TTL_SECONDS",
    "REQUIRE_SIGNED_DOWNLOADS",
    "CLEANUP_MAX_AGE_HOURS",
    "DOWNLOAD_SIGNING_SECRET",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_MODEL",
    "OPENAI_TIMEOUT_SECONDS",
    "HOST",
    "PORT",
    "FLASK_DEBUG",
    "LOG_LEVEL",
)

TEST_JWT_SECRET = "test-jwt-secret"
TEST_STATIC_TOKEN = "demo-token-12345"


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep settings from the surrounding shell out of every test."""
    for name in QUICKSCAN_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Completion client double
# =============================================================================


class ScriptedCompletionClient(ICompletionClient):
    """
    ICompletionClient that records requests and replays a fixed reply,
    or raises a configured domain error.
    """

    def __init__(self, reply: str = "Scripted reply", error: Optional[DomainError] = None):
        self.default_model = "gpt-4o-mini"
        self.reply = reply
        self.error = error
        self.requests: List[CompletionRequest] = []

    def is_available(self) -> bool:
        return True

    def complete(self, request: CompletionRequest) -> ChatCompletion:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return ChatCompletion(
            content=self.reply,
            model=request.model or self.default_model,
            usage=TokenUsage(prompt_tokens=12, completion_tokens=5, total_tokens=17),
        )


@pytest.fixture
def completion_client() -> ScriptedCompletionClient:
    return ScriptedCompletionClient()


# =============================================================================
# Configuration and application fixtures
# =============================================================================


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def auth_config() -> AuthConfig:
    # Minimum bcrypt cost keeps the suite fast
    return AuthConfig(
        jwt_secret=TEST_JWT_SECRET,
        expiration_hours=1,
        bcrypt_rounds=4,
        static_tokens=[TEST_STATIC_TOKEN],
    )


@pytest.fixture
def storage_config(upload_dir) -> StorageConfig:
    return StorageConfig(storage_type="temporary", upload_dir=str(upload_dir))


@pytest.fixture
def app_config(auth_config, storage_config) -> AppConfig:
    return AppConfig(
        auth=auth_config,
        storage=storage_config,
        openai=OpenAIConfig(api_key=""),
        testing=True,
    )


@pytest.fixture
def app(app_config, completion_client):
    return create_app(app_config, completion_client=completion_client)


@pytest.fixture
def client(app):
    return app.test_client()


# =============================================================================
# Pytest Configuration Hooks
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (full app through the test client)")
    config.addinivalue_line("markers", "contract: Contract tests (verify interface compliance)")
    config.addinivalue_line("markers", "property: Property-based tests using Hypothesis")


def pytest_collection_modifyitems(config, items):
    """
    Automatically mark tests based on their location.

    - tests/unit/* -> @pytest.mark.unit
    - tests/integration/* -> @pytest.mark.integration
    - tests/contracts/* -> @pytest.mark.contract
    - tests/property/* -> @pytest.mark.property
    """
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path or "\\unit\\" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path or "\\integration\\" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/contracts/" in test_path or "\\contracts\\" in test_path:
            item.add_marker(pytest.mark.contract)
        elif "/property/" in test_path or "\\property\\" in test_path:
            item.add_marker(pytest.mark.property)
