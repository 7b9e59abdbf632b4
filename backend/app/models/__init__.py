"""
Pydantic models for database documents.
"""
from app.models.user import User
from app.models.password import PasswordCategory, PasswordEntry, PasswordSummary

__all__ = [
    "User",
    "PasswordCategory",
    "PasswordEntry",
    "PasswordSummary",
]
