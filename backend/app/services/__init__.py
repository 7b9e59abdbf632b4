"""
Service layer for business logic.
"""
from app.services.auth_service import AuthService
from app.services.password_service import PasswordService

__all__ = [
    "AuthService",
    "PasswordService",
]
