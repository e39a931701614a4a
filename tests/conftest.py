"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

import pytest
from typing import Generator

from config.settings import Settings, get_settings


TEST_SECRET = "test-fulfill-secret"
TEST_CJ_KEY = "test-cj-api-key"


# ===================
# FIXTURES
# ===================

@pytest.fixture
def test_settings() -> Settings:
    """Settings with both secrets configured, ignoring any local .env."""
    return Settings(
        _env_file=None,
        orders_secret=TEST_SECRET,
        cj_api_key=TEST_CJ_KEY,
    )


@pytest.fixture
def unconfigured_settings() -> Settings:
    """Settings with the orders secret but no CJ key."""
    return Settings(
        _env_file=None,
        orders_secret=TEST_SECRET,
        cj_api_key=None,
    )


@pytest.fixture
def fulfill_payload() -> dict:
    """Sample storefront fulfill request body."""
    return {
        "sessionId": "cs_test_abcdef1234567890",
        "items": ["vr_lite", "unknown_sku"],
        "shippingName": "Ada Lovelace",
        "shippingAddress": "12 Analytical Way",
        "shippingCity": "London",
        "shippingState": "Greater London",
        "shippingZip": "NW1 6XE",
        "shippingCountry": "GB",
        "email": "ada@example.com",
    }


@pytest.fixture
def auth_headers() -> dict:
    return {"x-fulfill-secret": TEST_SECRET}


# ===================
# API TEST CLIENT
# ===================

def _client_with_settings(settings: Settings):
    from fastapi.testclient import TestClient
    from main import app

    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def test_client(test_settings) -> Generator:
    """
    FastAPI test client with both secrets configured.

    Usage:
        def test_endpoint(test_client, auth_headers, fulfill_payload):
            response = test_client.post("/api/cj-fulfill", json=fulfill_payload, headers=auth_headers)
    """
    yield from _client_with_settings(test_settings)


@pytest.fixture
def test_client_without_cj(unconfigured_settings) -> Generator:
    """FastAPI test client with no CJ API key."""
    yield from _client_with_settings(unconfigured_settings)
