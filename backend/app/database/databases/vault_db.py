"""
Vault database configuration.
Stores per-account password entries. Secrets are kept as one-way hashes only.
"""

DB_NAME = "vault_db"


class Collections:
    """Collection names in vault_db."""
    PASSWORDS = "passwords"
    METADATA = "_metadata"


# Manifest for registry
DB_MANIFEST = {
    "db_name": DB_NAME,
    "purpose": "Password entries owned by accounts",
    "collections": [Collections.PASSWORDS, Collections.METADATA],
    "access_level": "restricted",
}
