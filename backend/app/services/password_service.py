"""
Password entry service: create, list, read, edit and delete vault records.

Secrets are hashed on the way in and never come back out. Every operation
is a single round trip to MongoDB; nothing is cached between calls.
"""
import logging
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from app.core import security
from app.core.exceptions import NotFoundError, StoreError
from app.core.validation import parse_input
from app.database.databases import vault_db
from app.models.password import PasswordEntry, PasswordSummary
from app.schemas.password import PasswordCreate, PasswordUpdate

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Password record not found"


class PasswordService:
    """Service for password entry operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with vault database."""
        self.db = db
        self.passwords = db[vault_db.Collections.PASSWORDS]

    async def create_password(
        self, data: PasswordCreate | dict[str, Any]
    ) -> PasswordEntry:
        """
        Create a password entry.

        The plaintext `password` is hashed before the document is built;
        the returned entry carries only the hash.

        Raises:
            ValidationError: If a required field is missing or invalid
            StoreError: If the insert fails
        """
        request = parse_input(PasswordCreate, data)
        now = datetime.now(timezone.utc)

        password_doc = request.model_dump(mode="json", exclude={"password"})
        password_doc["hashed_password"] = security.hash_password(request.password)
        password_doc["created_at"] = now
        password_doc["updated_at"] = now

        try:
            result = await self.passwords.insert_one(password_doc)
        except PyMongoError as e:
            logger.error("Insert of password entry failed: %s", type(e).__name__)
            raise StoreError("Could not save password record") from e

        password_doc["_id"] = str(result.inserted_id)
        logger.info(
            "Created password entry %s for owner %s",
            password_doc["_id"],
            request.owner_id,
        )
        return PasswordEntry(**password_doc)

    async def list_passwords(self, owner_id: str) -> list[PasswordSummary]:
        """
        List all entries of an owner, oldest first.

        The hash is excluded by the query itself, so it never leaves the database.
        """
        cursor = self.passwords.find(
            {"owner_id": owner_id},
            {"hashed_password": 0},
            sort=[("created_at", 1), ("_id", 1)],
        )

        try:
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error("Listing password entries failed: %s", type(e).__name__)
            raise StoreError("Could not list password records") from e

        return [self._doc_to_summary(doc) for doc in docs]

    async def get_password(self, password_id: str) -> PasswordEntry:
        """
        Get a full entry, hash included, for internal use.

        Raises:
            NotFoundError: If no entry has this ID
        """
        oid = self._object_id(password_id)

        try:
            doc = await self.passwords.find_one({"_id": oid})
        except PyMongoError as e:
            logger.error("Lookup of password entry failed: %s", type(e).__name__)
            raise StoreError("Could not read password record") from e

        if not doc:
            raise NotFoundError(NOT_FOUND_MESSAGE)

        doc["_id"] = str(doc["_id"])
        return PasswordEntry(**doc)

    async def edit_password(
        self, password_id: str, update: PasswordUpdate | dict[str, Any]
    ) -> PasswordEntry:
        """
        Apply a partial update to an entry.

        The secret is re-hashed only when a new plaintext `password` is part
        of the update; any other edit leaves the stored hash as it was.
        Concurrent edits are last-write-wins.

        Raises:
            ValidationError: If the update is invalid or touches an immutable field
            NotFoundError: If no entry has this ID
            StoreError: If the update fails
        """
        request = parse_input(PasswordUpdate, update)
        changes = request.changes()

        plain_password = changes.pop("password", None)
        if plain_password is not None:
            changes["hashed_password"] = security.hash_password(plain_password)
        changes["updated_at"] = datetime.now(timezone.utc)

        oid = self._object_id(password_id)

        try:
            doc = await self.passwords.find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Update of password entry failed: %s", type(e).__name__)
            raise StoreError("Could not update password record") from e

        if not doc:
            raise NotFoundError(NOT_FOUND_MESSAGE)

        logger.info(
            "Edited password entry %s (fields: %s)",
            password_id,
            ", ".join(sorted(k for k in changes if k != "updated_at")) or "none",
        )
        doc["_id"] = str(doc["_id"])
        return PasswordEntry(**doc)

    async def delete_password(self, password_id: str) -> PasswordSummary:
        """
        Physically remove an entry.

        Deleting an ID that is already gone fails the same way every time.

        Raises:
            NotFoundError: If no entry has this ID
            StoreError: If the delete fails
        """
        oid = self._object_id(password_id)

        try:
            doc = await self.passwords.find_one_and_delete({"_id": oid})
        except PyMongoError as e:
            logger.error("Delete of password entry failed: %s", type(e).__name__)
            raise StoreError("Could not delete password record") from e

        if not doc:
            raise NotFoundError(NOT_FOUND_MESSAGE)

        logger.info("Deleted password entry %s", password_id)
        return self._doc_to_summary(doc)

    async def verify_password(self, password_id: str, plain_password: str) -> bool:
        """Check a candidate plaintext against the stored hash of an entry."""
        entry = await self.get_password(password_id)
        return security.verify_password(plain_password, entry.hashed_password)

    def _object_id(self, password_id: str) -> ObjectId:
        """Parse an entry ID. Anything that is not an ObjectId cannot exist."""
        try:
            return ObjectId(password_id)
        except (InvalidId, TypeError):
            raise NotFoundError(NOT_FOUND_MESSAGE) from None

    def _doc_to_summary(self, doc: dict) -> PasswordSummary:
        """Convert a MongoDB document to a secret-free summary."""
        doc = {k: v for k, v in doc.items() if k != "hashed_password"}
        doc["_id"] = str(doc["_id"])
        return PasswordSummary(**doc)
