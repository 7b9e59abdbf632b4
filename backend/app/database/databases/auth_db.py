"""
Auth database configuration.
Stores account identity and hashed authentication secrets.
"""

DB_NAME = "auth_db"


class Collections:
    """Collection names in auth_db."""
    USERS = "users"
    METADATA = "_metadata"


# Manifest for registry
DB_MANIFEST = {
    "db_name": DB_NAME,
    "purpose": "Account identity and login secrets",
    "collections": [Collections.USERS, Collections.METADATA],
    "access_level": "restricted",
}
