"""
Authentication service for account registration and login.
"""
import logging
from datetime import datetime, time, timezone
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.core import security
from app.core.exceptions import AuthError, ConflictError, NotFoundError, StoreError
from app.core.validation import parse_input
from app.database.databases import auth_db
from app.models.user import User
from app.schemas.auth import (
    AccountResponse,
    ChangePasswordRequest,
    ChangePasswordResponse,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
)

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with auth database."""
        self.db = db
        self.users_collection = db[auth_db.Collections.USERS]

    async def register_user(
        self, request: RegisterRequest | dict[str, Any]
    ) -> RegisterResponse:
        """
        Register a new user.

        Args:
            request: Registration data (email, password, name, surname, birthdate)

        Returns:
            RegisterResponse with created user ID

        Raises:
            ValidationError: If the registration data is malformed
            ConflictError: If the email is already registered
            StoreError: If the account cannot be saved
        """
        request = parse_input(RegisterRequest, request)

        existing = await self._find_one({"email": request.email})
        if existing:
            raise ConflictError("Email already registered")

        user_doc = {
            "email": request.email,
            "hashed_password": security.hash_password(request.password),
            "name": request.name,
            "surname": request.surname,
            # BSON has no date type
            "birthdate": datetime.combine(request.birthdate, time.min, tzinfo=timezone.utc),
            "created_at": datetime.now(timezone.utc),
        }

        try:
            result = await self.users_collection.insert_one(user_doc)
        except DuplicateKeyError:
            # Lost a race against a concurrent registration of the same email
            raise ConflictError("Email already registered") from None
        except PyMongoError as e:
            logger.error("Insert of user failed: %s", type(e).__name__)
            raise StoreError("Could not save account") from e

        user_id = str(result.inserted_id)
        logger.info("Registered user %s", user_id)

        return RegisterResponse(
            user_id=user_id,
            email=request.email,
            message="Registration successful",
        )

    async def login(self, request: LoginRequest | dict[str, Any]) -> AccountResponse:
        """
        Authenticate a user by email and password.

        Unknown email and wrong password fail identically, and take
        comparable time, so callers cannot probe which emails exist.

        Returns:
            AccountResponse with the account identity (no hash)

        Raises:
            AuthError: If the credentials do not match an account
        """
        request = parse_input(LoginRequest, request)

        user_doc = await self._find_one({"email": request.email})

        if not user_doc:
            security.dummy_verify()
            logger.info("Failed login attempt")
            raise AuthError(INVALID_CREDENTIALS)

        if not security.verify_password(request.password, user_doc["hashed_password"]):
            logger.info("Failed login attempt for user %s", user_doc["_id"])
            raise AuthError(INVALID_CREDENTIALS)

        user = self._doc_to_user(user_doc)
        logger.info("User %s logged in", user.id)

        return AccountResponse(
            id=user.id,
            email=user.email,
            name=user.name,
            surname=user.surname,
            birthdate=user.birthdate,
            created_at=user.created_at,
        )

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User ObjectId as string

        Returns:
            User model or None if not found
        """
        try:
            oid = ObjectId(user_id)
        except (InvalidId, TypeError):
            return None

        user_doc = await self._find_one({"_id": oid})
        if not user_doc:
            return None

        return self._doc_to_user(user_doc)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email.

        Args:
            email: User email address

        Returns:
            User model or None if not found
        """
        user_doc = await self._find_one({"email": email})
        if not user_doc:
            return None

        return self._doc_to_user(user_doc)

    async def change_password(
        self, request: ChangePasswordRequest | dict[str, Any]
    ) -> ChangePasswordResponse:
        """
        Change user password after verifying current password.

        Raises:
            NotFoundError: If the user does not exist
            AuthError: If the current password is incorrect
            StoreError: If the update fails
        """
        request = parse_input(ChangePasswordRequest, request)

        user = await self.get_user_by_id(request.user_id)
        if user is None:
            raise NotFoundError("User not found")

        if not security.verify_password(request.current_password, user.hashed_password):
            logger.info("Rejected password change for user %s", user.id)
            raise AuthError("Current password is incorrect")

        new_hashed_password = security.hash_password(request.new_password)
        try:
            result = await self.users_collection.update_one(
                {"_id": ObjectId(user.id)},
                {"$set": {"hashed_password": new_hashed_password}},
            )
        except PyMongoError as e:
            logger.error("Password update failed: %s", type(e).__name__)
            raise StoreError("Could not update password") from e

        if result.matched_count == 0:
            raise NotFoundError("User not found")

        logger.info("Password changed for user %s", user.id)
        return ChangePasswordResponse(
            message="Password changed successfully",
            user_id=user.id,
            email=user.email,
        )

    async def _find_one(self, query: dict) -> Optional[dict]:
        try:
            return await self.users_collection.find_one(query)
        except PyMongoError as e:
            logger.error("User lookup failed: %s", type(e).__name__)
            raise StoreError("Could not read account") from e

    def _doc_to_user(self, user_doc: dict) -> User:
        """Convert a MongoDB document to a User model."""
        user_doc = dict(user_doc)
        user_doc["_id"] = str(user_doc["_id"])
        birthdate = user_doc.get("birthdate")
        if isinstance(birthdate, datetime):
            user_doc["birthdate"] = birthdate.date()
        return User(**user_doc)
