"""
Password entry models for the vault database.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class PasswordCategory(str, Enum):
    """Fixed set of categories an entry can be filed under."""
    SOCIAL = "Social"
    WORK = "Work"
    BANKING = "Banking"
    OTHER = "Other"


class PasswordSummary(BaseModel):
    """
    Password entry without any secret material.

    This is what listings return: the hash is projected out at query time
    and the model has no field to carry it.
    """
    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    owner_id: str = Field(..., description="Owning account ID")
    category: PasswordCategory = Field(
        default=PasswordCategory.OTHER,
        description="Entry category"
    )
    service_name: str = Field(..., description="Service the credential belongs to, e.g. Google")
    username: str = Field(..., description="Login name on that service")
    notes: Optional[str] = Field(None, description="Free-form notes")
    tags: list[str] = Field(default_factory=list, description="Tags, in caller order")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp"
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last modification timestamp"
    )

    class Config:
        populate_by_name = True
        use_enum_values = True


class PasswordEntry(PasswordSummary):
    """
    Full password entry document for MongoDB vault_db.passwords collection.

    Only for internal use, e.g. verifying a candidate secret.
    """
    hashed_password: str = Field(..., description="Bcrypt hash of the secret")
