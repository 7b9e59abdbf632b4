"""
Global test fixtures for the credential vault.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Account and password entry factories
- FastAPI test clients wired to the mock database
"""

import os
import sys
from pathlib import Path
from typing import Generator
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Cheap bcrypt for tests; must be set before app.core.security is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest.fixture
def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.

    This provides an in-memory MongoDB that behaves like Motor
    for testing purposes.
    """
    from mongomock_motor import AsyncMongoMockClient
    yield AsyncMongoMockClient()


@pytest_asyncio.fixture
async def mock_auth_db(mock_async_mongo_client):
    """Provide mock auth_db database."""
    db = mock_async_mongo_client["auth_db"]
    # Create indexes like the real app
    await db.users.create_index("email", unique=True)
    yield db


@pytest_asyncio.fixture
async def mock_vault_db(mock_async_mongo_client):
    """Provide mock vault_db database."""
    db = mock_async_mongo_client["vault_db"]
    await db.passwords.create_index("owner_id")
    await db.passwords.create_index([("owner_id", 1), ("created_at", 1)])
    yield db


# =============================================================================
# Account Fixtures
# =============================================================================

@pytest.fixture
def test_user_data() -> dict:
    """Basic test user data for registration."""
    return {
        "email": "testuser@example.com",
        "password": "SecurePassword123!",
        "name": "Test",
        "surname": "User",
        "birthdate": "1990-04-12",
    }


@pytest.fixture
def test_user_credentials(test_user_data) -> dict:
    """Login body matching test_user_data."""
    return {
        "email": test_user_data["email"],
        "password": test_user_data["password"],
    }


# =============================================================================
# Password Entry Fixtures
# =============================================================================

@pytest.fixture
def owner_id() -> str:
    """An account ID owning password entries."""
    return "507f1f77bcf86cd799439011"


@pytest.fixture
def password_data(owner_id) -> dict:
    """Create body for a banking password entry."""
    return {
        "owner_id": owner_id,
        "category": "Banking",
        "service_name": "Bank",
        "username": "alice",
        "password": "s3cr3t!",
        "notes": "main account",
        "tags": ["finance", "personal"],
    }


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app(mock_async_mongo_client):
    """
    Create the FastAPI app with every MongoDB access routed to the mock client.

    Startup (registry sync, index creation) and the service dependencies
    all see the same in-memory database.
    """
    from app.main import app as fastapi_app
    from app.routers.auth import get_auth_service
    from app.routers.passwords import get_password_service
    from app.services.auth_service import AuthService
    from app.services.password_service import PasswordService

    fastapi_app.dependency_overrides[get_auth_service] = (
        lambda: AuthService(mock_async_mongo_client["auth_db"])
    )
    fastapi_app.dependency_overrides[get_password_service] = (
        lambda: PasswordService(mock_async_mongo_client["vault_db"])
    )

    with patch(
        "app.main.get_mongo_client",
        AsyncMock(return_value=mock_async_mongo_client),
    ):
        yield fastapi_app

    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator:
    """
    Create a TestClient for the FastAPI app.

    Use this for synchronous endpoint testing.
    """
    with TestClient(app) as c:
        yield c

