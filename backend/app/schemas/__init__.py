"""
Request and response schemas for API endpoints.
"""
from app.schemas.auth import (
    AccountResponse,
    ChangePasswordRequest,
    ChangePasswordResponse,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
)
from app.schemas.password import (
    PasswordCreate,
    PasswordUpdate,
    PasswordResponse,
    PasswordVerifyRequest,
    PasswordVerifyResponse,
)

__all__ = [
    # Auth
    "AccountResponse",
    "ChangePasswordRequest",
    "ChangePasswordResponse",
    "LoginRequest",
    "RegisterRequest",
    "RegisterResponse",
    # Password entries
    "PasswordCreate",
    "PasswordUpdate",
    "PasswordResponse",
    "PasswordVerifyRequest",
    "PasswordVerifyResponse",
]
