"""
Database registry management.
Registers every database this service owns and creates its indexes on startup.
"""
import logging
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorClient

from app.database.databases import auth_db, vault_db, system_db

logger = logging.getLogger(__name__)

# Every database this service owns, the registry itself included
ALL_DB_MANIFESTS = [
    auth_db.DB_MANIFEST,
    vault_db.DB_MANIFEST,
    system_db.DB_MANIFEST,
]

SCHEMA_VERSION = "1.0"


async def sync_registry(client: AsyncIOMotorClient) -> None:
    """
    Record every owned database in system_db.db_registry and stamp a
    _metadata document inside each of them.
    """
    registry = client[system_db.DB_NAME][system_db.Collections.DB_REGISTRY]
    now = datetime.now(timezone.utc)

    for manifest in ALL_DB_MANIFESTS:
        db_name = manifest["db_name"]

        await registry.update_one(
            {"_id": db_name},
            {
                "$set": {
                    "purpose": manifest["purpose"],
                    "collections": manifest["collections"],
                    "access_level": manifest["access_level"],
                    "schema_version": SCHEMA_VERSION,
                    "updated_at": now,
                },
                "$setOnInsert": {"created_at": now},
            },
            upsert=True,
        )

        await client[db_name]["_metadata"].update_one(
            {"_id": "db_metadata"},
            {
                "$set": {"db_name": db_name, "last_updated_at": now},
                "$setOnInsert": {"created_at": now},
            },
            upsert=True,
        )

    logger.info("Registry synced for %d databases", len(ALL_DB_MANIFESTS))


async def create_indexes(client: AsyncIOMotorClient) -> None:
    """Create necessary indexes for all databases."""

    # One account per email
    users = client[auth_db.DB_NAME][auth_db.Collections.USERS]
    await users.create_index("email", unique=True)

    # Password entries are always looked up by owner, listed oldest first
    passwords = client[vault_db.DB_NAME][vault_db.Collections.PASSWORDS]
    await passwords.create_index("owner_id")
    await passwords.create_index([("owner_id", 1), ("created_at", 1)])

    logger.info("Indexes ensured")
