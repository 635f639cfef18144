"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/                   # Fast, isolated tests (mocked collaborators)
    │   ├── eassyevent_identity/
    │   └── cli/
    └── integration/            # SQLite-backed tests
        ├── persistence/        # Repository against a real database
        └── api/                # End-to-end through FastAPI's TestClient

Integration tests run against in-process SQLite (aiosqlite), so no
external services are needed.
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest
from dotenv import load_dotenv

from eassyevent_config import clear_settings_cache
from eassyevent_identity.domain.account import (
    Account,
    Address,
    Amenity,
    BusinessType,
    VenueProfile,
)

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")

FIXED_NOW = datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that verify database/persistence behavior",
    )


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Start and end the session with an empty settings cache."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def venue_profile() -> VenueProfile:
    return VenueProfile(
        business_name="Royal Banquets",
        address=Address(
            line1="12 MG Road",
            city="Pune",
            state="Maharashtra",
            pin_code="411001",
        ),
        seating_capacity=250,
        business_type=BusinessType.BANQUET_HALL,
        amenities=(Amenity.PARKING, Amenity.WIFI),
        phone_number="9876543210",
    )


@pytest.fixture
def make_account(venue_profile):
    """Factory for accounts; verified and active unless overridden."""

    def _make(**overrides) -> Account:
        values = {
            "email": "owner@example.com",
            "profile": venue_profile,
            "password_hash": "hashed_password",
            "is_email_verified": True,
        }
        values.update(overrides)
        return Account(**values)

    return _make
