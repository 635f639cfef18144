"""Pytest fixtures for API integration tests."""

import asyncio
from unittest.mock import Mock
from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from eassyevent.presentation.api.app import create_app
from eassyevent.presentation.api.config import API_V1_PREFIX
from eassyevent.presentation.api.dependencies import get_db_session, get_email_service
from eassyevent_config.settings import Settings
from eassyevent_identity.infrastructure.email import EmailService
from eassyevent_identity.infrastructure.persistence.sqlalchemy import IdentityBase

TEST_PASSWORD = "SecurePass123"


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def auth_url(api_v1_prefix) -> str:
    return f"{api_v1_prefix}/auth"


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings; development keeps the refresh cookie usable over HTTP."""
    return Settings(
        # Required security settings
        jwt_secret_key=SecretStr("test-access-secret-for-testing-only"),
        jwt_refresh_secret_key=SecretStr("test-refresh-secret-for-testing-only"),
        postgres_password=SecretStr("test-password"),
        environment="development",
        api_public_url="http://testserver",
        api_cors_origins="http://localhost:3000",
        frontend_base_url="http://localhost:3000",
        bcrypt_rounds=4,
        smtp_enabled=False,
        rate_limit_enabled=False,
        log_level="WARNING",
    )


@pytest.fixture
def test_db_engine(tmp_path):
    """Create a file-backed SQLite database.

    The TestClient runs the app on its own event loop, so connections
    are not pooled across loops.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'eassyevent-test.db'}",
        echo=False,
        poolclass=NullPool,
    )

    async def _create_schema():
        async with engine.begin() as conn:
            await conn.run_sync(IdentityBase.metadata.create_all)

    asyncio.run(_create_schema())
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def email_service() -> Mock:
    """Outbound email is captured instead of sent."""
    return Mock(spec=EmailService)


@pytest.fixture
def app(api_settings, test_db_engine, email_service):
    app = create_app(settings=api_settings)

    test_session_maker = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Override the database session dependency
    async def override_get_db_session():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_email_service] = lambda: email_service
    return app


@pytest.fixture
def test_client(app) -> TestClient:
    """Create a test client; the lifespan is not run."""
    return TestClient(app)


@pytest.fixture
def signup_data() -> dict:
    """Valid signup payload (camelCase, as sent by the frontend)."""
    return {
        "email": "owner@example.com",
        "password": TEST_PASSWORD,
        "businessName": "Royal Banquets",
        "address": {
            "line1": "12 MG Road",
            "city": "Pune",
            "state": "Maharashtra",
            "pinCode": "411001",
        },
        "seatingCapacity": 250,
        "businessType": "Banquet Hall",
        "amenities": ["Parking", "WiFi"],
        "phoneNumber": "9876543210",
    }


def token_from_url(url: str) -> str:
    return parse_qs(urlparse(url).query)["token"][0]


@pytest.fixture
def last_verification_token(email_service):
    """Read the token from the most recent verification email."""

    def _token() -> str:
        call_args = email_service.send_verification_email.call_args
        return token_from_url(call_args.kwargs["verification_url"])

    return _token


@pytest.fixture
def last_reset_token(email_service):
    """Read the token from the most recent password reset email."""

    def _token() -> str:
        call_args = email_service.send_password_reset_email.call_args
        return token_from_url(call_args.kwargs["reset_url"])

    return _token


@pytest.fixture
def verified_account(test_client, auth_url, signup_data, last_verification_token) -> dict:
    """Sign up and verify an account; returns the signup payload."""
    response = test_client.post(f"{auth_url}/signup", json=signup_data)
    assert response.status_code == 201

    response = test_client.post(
        f"{auth_url}/verify-email", params={"token": last_verification_token()}
    )
    assert response.status_code == 200
    return signup_data


@pytest.fixture
def access_token(test_client, auth_url, verified_account) -> str:
    response = test_client.post(
        f"{auth_url}/login",
        json={"email": verified_account["email"], "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    return response.json()["data"]["token"]


@pytest.fixture
def auth_headers(access_token) -> dict:
    """Get auth headers for a verified, logged-in account."""
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def run_statement(test_db_engine):
    """Run one SQL statement against the test database, outside the app."""

    def _run(statement):
        async def _execute():
            async with test_db_engine.begin() as conn:
                result = await conn.execute(statement)
                return result.all() if result.returns_rows else None

        return asyncio.run(_execute())

    return _run
