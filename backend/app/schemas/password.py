"""
Password entry request/response schemas.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.core.security import MAX_SECRET_BYTES, secret_fits
from app.models.password import PasswordCategory, PasswordSummary

# Fields fixed at creation time
IMMUTABLE_FIELDS = ("id", "_id", "owner_id", "created_at")

# Fields an update may omit but never set to null
NON_NULLABLE_FIELDS = ("category", "service_name", "username", "password", "tags")


def _check_secret_size(value: Optional[str]) -> Optional[str]:
    if value is not None and not secret_fits(value):
        raise ValueError(f"Password must be at most {MAX_SECRET_BYTES} bytes long")
    return value


class PasswordCreate(BaseModel):
    """Create password entry request. `password` is plaintext and is hashed before storage."""
    owner_id: str = Field(..., min_length=1, description="Owning account ID")
    category: PasswordCategory = Field(
        default=PasswordCategory.OTHER,
        description="Entry category"
    )
    service_name: str = Field(..., min_length=1, description="Service name, e.g. LinkedIn")
    username: str = Field(..., min_length=1, description="Login on that service")
    password: str = Field(..., min_length=1, description="Plaintext secret")
    notes: Optional[str] = Field(None, description="Optional notes")
    tags: list[str] = Field(default_factory=list, description="Optional tags")

    @field_validator("password")
    @classmethod
    def password_fits(cls, value):
        return _check_secret_size(value)

    class Config:
        extra = "forbid"


class PasswordUpdate(BaseModel):
    """
    Partial update of a password entry.

    Only the fields actually sent are applied. Sending `password` replaces
    the stored hash; leaving it out keeps the hash untouched.
    """
    category: Optional[PasswordCategory] = Field(None, description="Entry category")
    service_name: Optional[str] = Field(None, min_length=1, description="Service name")
    username: Optional[str] = Field(None, min_length=1, description="Login on that service")
    password: Optional[str] = Field(None, min_length=1, description="New plaintext secret")
    notes: Optional[str] = Field(None, description="Notes, null clears them")
    tags: Optional[list[str]] = Field(None, description="Replacement tag list")

    @field_validator("password")
    @classmethod
    def password_fits(cls, value):
        return _check_secret_size(value)

    class Config:
        extra = "forbid"

    @model_validator(mode="before")
    @classmethod
    def reject_immutable_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            for name in IMMUTABLE_FIELDS:
                if name in data:
                    raise ValueError(f"{name} cannot be changed")
        return data

    @model_validator(mode="after")
    def reject_nulls(self) -> "PasswordUpdate":
        for name in NON_NULLABLE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields explicitly sent by the caller."""
        return self.model_dump(exclude_unset=True, mode="json")


class PasswordResponse(BaseModel):
    """Password entry as returned over the API. Never includes the hash."""
    id: str = Field(..., description="Entry ID")
    owner_id: str = Field(..., description="Owning account ID")
    category: PasswordCategory = Field(..., description="Entry category")
    service_name: str = Field(..., description="Service name")
    username: str = Field(..., description="Login on that service")
    notes: Optional[str] = Field(None, description="Notes")
    tags: list[str] = Field(default_factory=list, description="Tags")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last modification timestamp")

    @classmethod
    def from_entry(cls, entry: PasswordSummary) -> "PasswordResponse":
        """Build a response from a stored entry, dropping any hash it carries."""
        return cls(**entry.model_dump(exclude={"hashed_password"}))


class PasswordVerifyRequest(BaseModel):
    """Candidate plaintext to compare against a stored entry."""
    password: str = Field(..., min_length=1, description="Plaintext to check")


class PasswordVerifyResponse(BaseModel):
    """Result of comparing a candidate against the stored hash."""
    match: bool = Field(..., description="True if the candidate matches")
