"""
Tests for AuthService.

These tests cover:
- Registration with hashed secrets and unique emails
- Login that does not reveal whether an email exists
- Account lookups and password change
"""

from unittest.mock import AsyncMock, patch

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from app.core.exceptions import AuthError, ConflictError, NotFoundError, StoreError, ValidationError
from app.core.security import verify_password


class TestRegisterUser:
    """Tests for AuthService.register_user."""

    @pytest.mark.asyncio
    async def test_register_stores_hashed_password(self, auth_service, mock_auth_db, test_user_data):
        """The account secret is stored only as a hash."""
        result = await auth_service.register_user(test_user_data)

        user_doc = await mock_auth_db.users.find_one({"_id": ObjectId(result.user_id)})
        assert user_doc["hashed_password"] != test_user_data["password"]
        assert verify_password(test_user_data["password"], user_doc["hashed_password"])
        assert "password" not in user_doc

    @pytest.mark.asyncio
    async def test_register_returns_user_id_and_email(self, auth_service, test_user_data):
        """The response identifies the new account."""
        result = await auth_service.register_user(test_user_data)

        assert ObjectId.is_valid(result.user_id)
        assert result.email == test_user_data["email"]
        assert result.message == "Registration successful"

    @pytest.mark.asyncio
    async def test_register_keeps_profile_fields(self, auth_service, test_user_data):
        """Name, surname and birthdate are persisted."""
        from datetime import date

        result = await auth_service.register_user(test_user_data)
        user = await auth_service.get_user_by_id(result.user_id)

        assert user.name == "Test"
        assert user.surname == "User"
        assert user.birthdate == date(1990, 4, 12)

    @pytest.mark.asyncio
    async def test_register_duplicate_email_raises_conflict(self, auth_service, test_user_data):
        """One account per email."""
        await auth_service.register_user(test_user_data)

        with pytest.raises(ConflictError):
            await auth_service.register_user({**test_user_data, "name": "Other"})

    @pytest.mark.asyncio
    async def test_register_duplicate_caught_by_unique_index_raises_conflict(
        self, auth_service, test_user_data
    ):
        """A concurrent registration that slips past the lookup still conflicts."""
        await auth_service.register_user(test_user_data)

        with patch.object(auth_service, "_find_one", AsyncMock(return_value=None)):
            with pytest.raises(ConflictError):
                await auth_service.register_user(test_user_data)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field, value",
        [
            ("email", "not-an-email"),
            ("password", "short"),
            ("name", ""),
            ("surname", ""),
            ("birthdate", "someday"),
        ],
    )
    async def test_register_malformed_input_raises_validation_error(
        self, auth_service, test_user_data, field, value
    ):
        """Malformed registration data is rejected before anything is stored."""
        with pytest.raises(ValidationError):
            await auth_service.register_user({**test_user_data, field: value})

    @pytest.mark.asyncio
    async def test_register_store_failure_raises_store_error(self, broken_db, test_user_data):
        """Persistence failures surface as StoreError."""
        from app.services.auth_service import AuthService

        with pytest.raises(StoreError):
            await AuthService(broken_db).register_user(test_user_data)


class TestLogin:
    """Tests for AuthService.login."""

    @pytest.mark.asyncio
    async def test_login_with_correct_credentials_returns_identity(
        self, auth_service, registered_user, test_user_credentials
    ):
        """Correct email and password return the account identity."""
        account = await auth_service.login(test_user_credentials)

        assert account.id == registered_user.user_id
        assert account.email == test_user_credentials["email"]
        assert account.name == "Test"
        assert "hashed_password" not in account.model_dump()

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_fail_identically(
        self, auth_service, registered_user, test_user_credentials
    ):
        """No signal distinguishes a wrong password from an unknown email."""
        with pytest.raises(AuthError) as wrong_password:
            await auth_service.login({**test_user_credentials, "password": "WrongPassword1!"})

        with pytest.raises(AuthError) as unknown_email:
            await auth_service.login({**test_user_credentials, "email": "nobody@example.com"})

        assert type(wrong_password.value) is type(unknown_email.value)
        assert wrong_password.value.message == unknown_email.value.message
        assert wrong_password.value.status_code == unknown_email.value.status_code

    @pytest.mark.asyncio
    async def test_login_unknown_email_is_not_a_not_found_error(self, auth_service):
        """An unknown email must not surface as NotFoundError."""
        with pytest.raises(AuthError) as exc_info:
            await auth_service.login({"email": "ghost@example.com", "password": "whatever1"})

        assert not isinstance(exc_info.value, NotFoundError)

    @pytest.mark.asyncio
    async def test_over_long_password_costs_the_same_for_known_and_unknown_email(
        self, auth_service, registered_user, test_user_credentials
    ):
        """Both failure paths spend the same bcrypt work on an over-long password."""
        from app.core import security

        costs = []
        for email in (test_user_credentials["email"], "ghost@example.com"):
            with patch.object(
                security.pwd_context, "dummy_verify", wraps=security.pwd_context.dummy_verify
            ) as dummy, patch.object(
                security.pwd_context, "verify", wraps=security.pwd_context.verify
            ) as verify:
                with pytest.raises(AuthError):
                    await auth_service.login({"email": email, "password": "p" * 80})
            costs.append((dummy.call_count, verify.call_count))

        assert costs[0] == costs[1]
        assert costs[0][0] == 1


class TestUserLookups:
    """Tests for get_user_by_id / get_user_by_email."""

    @pytest.mark.asyncio
    async def test_get_user_by_email(self, auth_service, registered_user, test_user_data):
        """Existing email returns the user."""
        user = await auth_service.get_user_by_email(test_user_data["email"])

        assert user is not None
        assert user.id == registered_user.user_id

    @pytest.mark.asyncio
    async def test_get_user_by_email_unknown_returns_none(self, auth_service):
        """Unknown email returns None."""
        assert await auth_service.get_user_by_email("nobody@example.com") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_id", ["not-an-id", str(ObjectId())])
    async def test_get_user_by_id_unknown_returns_none(self, auth_service, user_id):
        """Unknown or malformed IDs return None."""
        assert await auth_service.get_user_by_id(user_id) is None


class TestChangePassword:
    """Tests for AuthService.change_password."""

    @pytest.mark.asyncio
    async def test_change_password_rehashes(
        self, auth_service, registered_user, test_user_data, test_user_credentials
    ):
        """After a change the new password logs in and the old one does not."""
        result = await auth_service.change_password({
            "user_id": registered_user.user_id,
            "current_password": test_user_data["password"],
            "new_password": "BrandNewPassword9",
        })

        assert result.user_id == registered_user.user_id

        await auth_service.login({**test_user_credentials, "password": "BrandNewPassword9"})
        with pytest.raises(AuthError):
            await auth_service.login(test_user_credentials)

    @pytest.mark.asyncio
    async def test_change_password_wrong_current_raises_auth_error(
        self, auth_service, registered_user
    ):
        """The current password must be proven first."""
        with pytest.raises(AuthError):
            await auth_service.change_password({
                "user_id": registered_user.user_id,
                "current_password": "NotMyPassword",
                "new_password": "BrandNewPassword9",
            })

    @pytest.mark.asyncio
    async def test_change_password_unknown_user_raises_not_found(self, auth_service):
        """Unknown accounts cannot change passwords."""
        with pytest.raises(NotFoundError):
            await auth_service.change_password({
                "user_id": str(ObjectId()),
                "current_password": "whatever1",
                "new_password": "BrandNewPassword9",
            })

    @pytest.mark.asyncio
    async def test_change_password_store_failure_raises_store_error(
        self, auth_service, registered_user, test_user_data
    ):
        """A failed hash update surfaces as StoreError."""
        failing_update = AsyncMock(side_effect=ServerSelectionTimeoutError("timed out"))

        with patch.object(auth_service.users_collection, "update_one", failing_update):
            with pytest.raises(StoreError):
                await auth_service.change_password({
                    "user_id": registered_user.user_id,
                    "current_password": test_user_data["password"],
                    "new_password": "BrandNewPassword9",
                })

        failing_update.assert_awaited_once()
