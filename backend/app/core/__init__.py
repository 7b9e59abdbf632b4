"""
Core module - Security, error taxonomy and logging setup.
"""
from app.core.exceptions import (
    AuthError,
    ConfigError,
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
    VaultError,
)
from app.core.security import (
    hash_password,
    verify_password,
    dummy_verify,
    check_hashing_backend,
)

__all__ = [
    "AuthError",
    "ConfigError",
    "ConflictError",
    "NotFoundError",
    "StoreError",
    "ValidationError",
    "VaultError",
    "hash_password",
    "verify_password",
    "dummy_verify",
    "check_hashing_backend",
]
