"""
Authentication request/response schemas.
"""
from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.core.security import MAX_SECRET_BYTES, secret_fits


def _check_secret_size(value: str) -> str:
    if not secret_fits(value):
        raise ValueError(f"Password must be at most {MAX_SECRET_BYTES} bytes long")
    return value


class LoginRequest(BaseModel):
    """Login request body."""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class AccountResponse(BaseModel):
    """Account identity returned after a successful login. Never carries the hash."""
    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User email")
    name: str = Field(..., description="First name")
    surname: str = Field(..., description="Last name")
    birthdate: date = Field(..., description="Date of birth")
    created_at: datetime = Field(..., description="Account creation timestamp")


class RegisterRequest(BaseModel):
    """Registration request body."""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(
        ...,
        min_length=6,
        description="User password (min 6 characters)"
    )
    name: str = Field(..., min_length=1, description="First name")
    surname: str = Field(..., min_length=1, description="Last name")
    birthdate: date = Field(..., description="Date of birth (YYYY-MM-DD)")

    @field_validator("password")
    @classmethod
    def password_fits(cls, value):
        return _check_secret_size(value)


class RegisterResponse(BaseModel):
    """Registration response."""
    user_id: str = Field(..., description="Created user ID")
    email: str = Field(..., description="Registered email")
    message: str = Field(
        default="Registration successful",
        description="Success message"
    )


class ChangePasswordRequest(BaseModel):
    """Change the login password of an account."""
    user_id: str = Field(..., description="Account ID")
    current_password: str = Field(..., min_length=1, description="Current password")
    new_password: str = Field(
        ...,
        min_length=6,
        description="New password (min 6 characters)"
    )

    @field_validator("new_password")
    @classmethod
    def new_password_fits(cls, value: str) -> str:
        return _check_secret_size(value)


class ChangePasswordResponse(BaseModel):
    """Change password response."""
    message: str = Field(..., description="Success message")
    user_id: str = Field(..., description="Account ID")
    email: str = Field(..., description="Account email")
