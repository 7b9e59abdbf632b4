"""
Security utilities for one-way password hashing and verification.

Every stored secret, account passwords and vault entries alike, goes
through this module. There is no decrypt: a hash can only be compared
against a candidate plaintext.
"""
import logging

from passlib.context import CryptContext

from app.config import get_settings
from app.core.exceptions import ConfigError, ValidationError

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes of its input
MAX_SECRET_BYTES = 72

# Password hashing context using bcrypt
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=get_settings().bcrypt_rounds,
)


def secret_fits(plain_password: str) -> bool:
    """Check that a plaintext is short enough to be hashed without truncation."""
    return len(plain_password.encode("utf-8")) <= MAX_SECRET_BYTES


def hash_password(plain_password: str) -> str:
    """
    Hash a plain password using salted bcrypt.

    Args:
        plain_password: The plain text password to hash

    Returns:
        Hashed password string

    Raises:
        ValidationError: If the password exceeds the bcrypt input limit
        ConfigError: If the bcrypt backend or entropy source is unavailable
    """
    if not secret_fits(plain_password):
        raise ValidationError(
            f"Password must be at most {MAX_SECRET_BYTES} bytes long"
        )

    try:
        return pwd_context.hash(plain_password)
    except (RuntimeError, OSError) as e:
        logger.critical("Password hashing backend failure: %s", type(e).__name__)
        raise ConfigError("Password hashing is unavailable") from e


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    if not secret_fits(plain_password):
        # Same bcrypt cost as a real comparison
        pwd_context.dummy_verify()
        return False

    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a hash this context recognises
        logger.warning("Refusing to verify against an unrecognised hash format")
        return False


def dummy_verify() -> None:
    """Spend the time of a real verification without a stored hash."""
    pwd_context.dummy_verify()


def check_hashing_backend() -> None:
    """
    Make sure the bcrypt backend can hash and verify.

    Called once at startup so a broken backend fails the process early
    instead of failing every write.

    Raises:
        ConfigError: If hashing or verification does not work
    """
    probe = "startup-probe"
    hashed = hash_password(probe)
    if not verify_password(probe, hashed) or verify_password(probe + "!", hashed):
        raise ConfigError("Password hashing backend failed its self-check")
