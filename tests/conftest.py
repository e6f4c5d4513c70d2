"""Pytest fixtures for the auth service.

Each test gets a fresh app backed by an in-memory SQLite database, so
tests never touch the on-disk store.
"""

import pytest
from fastapi.testclient import TestClient

from server.config import Settings
from server.core.auth_service import AuthService
from server.core.security import PasswordHasher, TokenIssuer
from server.main import create_app

TEST_JWT_SECRET = "test-jwt-secret-for-testing-only"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        jwt_secret=TEST_JWT_SECRET,
        database_url="sqlite://",
        cors_origins="http://localhost:8501",
    )


@pytest.fixture
def api_app(settings):
    app = create_app(settings)
    yield app
    app.state.engine.dispose()


@pytest.fixture
def client(api_app):
    with TestClient(api_app) as test_client:
        yield test_client


@pytest.fixture
def db_session(api_app):
    session = api_app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(TEST_JWT_SECRET)


@pytest.fixture
def auth_service(db_session, token_issuer) -> AuthService:
    # minimum bcrypt cost keeps the suite fast
    return AuthService(db_session, PasswordHasher(rounds=4), token_issuer)
