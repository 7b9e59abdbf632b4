"""
Error taxonomy shared by the account store and the credential vault.

Services raise these; routers translate them into HTTP responses.
Messages are safe to return to callers and never carry secret material.
"""


class VaultError(Exception):
    """Base class for all service-level errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(VaultError):
    """Malformed or missing input. Not retryable without fixing the input."""

    status_code = 400


class AuthError(VaultError):
    """Credential mismatch, deliberately identical for unknown identities."""

    status_code = 401


class NotFoundError(VaultError):
    """Referenced record does not exist."""

    status_code = 404


class ConflictError(VaultError):
    """Uniqueness violation, e.g. an email that is already registered."""

    status_code = 409


class StoreError(VaultError):
    """Underlying persistence failure. May be transient."""

    status_code = 500


class ConfigError(VaultError):
    """Hashing subsystem misconfigured or unavailable. Fatal."""

    status_code = 500
