"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with ready-made services,
seeded records and response assertion helpers.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def auth_service(mock_auth_db):
    """AuthService backed by the mock auth database."""
    from app.services.auth_service import AuthService
    return AuthService(mock_auth_db)


@pytest.fixture
def password_service(mock_vault_db):
    """PasswordService backed by the mock vault database."""
    from app.services.password_service import PasswordService
    return PasswordService(mock_vault_db)


@pytest_asyncio.fixture
async def registered_user(auth_service, test_user_data):
    """A registered account; returns the RegisterResponse."""
    return await auth_service.register_user(test_user_data)


@pytest_asyncio.fixture
async def stored_password(password_service, password_data):
    """A persisted password entry; returns the PasswordEntry."""
    return await password_service.create_password(password_data)


# =============================================================================
# Failing Store Fixtures
# =============================================================================

@pytest.fixture
def broken_collection():
    """
    A collection whose every call fails like an unreachable MongoDB.
    """
    from pymongo.errors import ServerSelectionTimeoutError

    error = ServerSelectionTimeoutError("mongodb:27017: timed out")
    collection = MagicMock()
    for name in (
        "insert_one",
        "find_one",
        "find_one_and_update",
        "find_one_and_delete",
        "update_one",
    ):
        setattr(collection, name, AsyncMock(side_effect=error))

    cursor = MagicMock()
    cursor.to_list = AsyncMock(side_effect=error)
    collection.find = MagicMock(return_value=cursor)
    return collection


@pytest.fixture
def broken_db(broken_collection):
    """A database whose collections are all broken_collection."""
    db = MagicMock()
    db.__getitem__.return_value = broken_collection
    return db


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error response structure."""
    def _assert(response, status_code: int, detail_contains: str = None):
        assert response.status_code == status_code
        data = response.json()
        assert "detail" in data
        if detail_contains:
            assert detail_contains.lower() in str(data["detail"]).lower()
    return _assert


@pytest.fixture
def assert_no_secret_material():
    """Helper asserting a JSON payload carries no password or hash."""
    def _assert(payload, *plaintexts: str):
        serialized = str(payload)
        assert "hashed_password" not in serialized
        assert "$2b$" not in serialized
        for plaintext in plaintexts:
            assert plaintext not in serialized
    return _assert
