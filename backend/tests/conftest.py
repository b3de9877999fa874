"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
settings without any .env influence, in-memory repositories, and an app
wired to them.
"""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import ServiceContainer
from modules.auth.hashing import PasswordHasher
from shared.config import Settings, get_settings
from shared.database import reset_client_cache

from tests.fakes import (
    FakeGoogleOAuthClient,
    InMemorySecretRepository,
    InMemorySessionRepository,
    InMemoryUserRepository,
)


# Test session secret (only for testing)
TEST_SESSION_SECRET = "test-session-secret-for-testing-only"


@pytest.fixture(autouse=True)
def reset_caches():
    """Reset cached settings and database client around each test."""
    get_settings.cache_clear()
    reset_client_cache()
    yield
    get_settings.cache_clear()
    reset_client_cache()


@pytest.fixture
def settings() -> Settings:
    """Settings for tests; bcrypt at its minimum cost to keep tests fast."""
    return Settings(
        _env_file=None,
        environment="development",
        supabase_url="",
        supabase_service_role_key="",
        session_secret=TEST_SESSION_SECRET,
        bcrypt_rounds=4,
        frontend_url="https://frontend.example.com",
        cors_origins=["https://frontend.example.com"],
    )


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def secret_repository() -> InMemorySecretRepository:
    return InMemorySecretRepository()


@pytest.fixture
def oauth_client() -> FakeGoogleOAuthClient:
    return FakeGoogleOAuthClient()


@pytest.fixture
def container(
    settings,
    user_repository,
    session_repository,
    secret_repository,
    oauth_client,
) -> ServiceContainer:
    return ServiceContainer(
        settings,
        user_repository=user_repository,
        session_repository=session_repository,
        secret_repository=secret_repository,
        oauth_client=oauth_client,
    )


@pytest.fixture
def app(container):
    """Create a fresh app for each test."""
    return create_app(container=container)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)

