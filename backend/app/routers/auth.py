"""
Authentication router for registration, login and password change.
"""
from fastapi import APIRouter, Depends, HTTPException, status

from app.core.exceptions import VaultError
from app.database.connections import get_mongo_client
from app.database.databases import auth_db
from app.schemas.auth import (
    AccountResponse,
    ChangePasswordRequest,
    ChangePasswordResponse,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
)
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


async def get_auth_service() -> AuthService:
    """Dependency to get AuthService instance."""
    client = await get_mongo_client()
    db = client[auth_db.DB_NAME]
    return AuthService(db)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    body: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user account.

    - **email**: Valid email address (must be unique)
    - **password**: Password (minimum 6 characters)
    - **name**, **surname**: Required
    - **birthdate**: Date of birth (YYYY-MM-DD)
    """
    try:
        return await auth_service.register_user(body)
    except VaultError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "/login",
    response_model=AccountResponse,
    summary="Login with email and password",
)
async def login(
    body: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Check email and password and return the account identity.

    Unknown email and wrong password return the same 401.
    """
    try:
        return await auth_service.login(body)
    except VaultError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "/change-password",
    response_model=ChangePasswordResponse,
    summary="Change account password",
)
async def change_password(
    body: ChangePasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Replace the login password after verifying the current one.
    """
    try:
        return await auth_service.change_password(body)
    except VaultError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
