"""
System database configuration.
Registry of the databases this service owns.
"""

DB_NAME = "system_db"


class Collections:
    """Collection names in system_db."""
    DB_REGISTRY = "db_registry"


# Manifest for registry
DB_MANIFEST = {
    "db_name": DB_NAME,
    "purpose": "Registry of service databases",
    "collections": [Collections.DB_REGISTRY],
    "access_level": "system",
}
