"""
Passwords router for vault entry management.

Responses never include the stored hash.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.core.exceptions import VaultError
from app.database.connections import get_mongo_client
from app.database.databases import vault_db
from app.schemas.password import (
    PasswordCreate,
    PasswordResponse,
    PasswordUpdate,
    PasswordVerifyRequest,
    PasswordVerifyResponse,
)
from app.services.password_service import PasswordService

router = APIRouter(prefix="/passwords", tags=["Passwords"])


async def get_password_service() -> PasswordService:
    """Dependency to get PasswordService instance."""
    client = await get_mongo_client()
    db = client[vault_db.DB_NAME]
    return PasswordService(db)


@router.get(
    "",
    response_model=list[PasswordResponse],
    summary="List password entries",
)
async def list_passwords(
    owner_id: str = Query(..., min_length=1, description="Owning account ID"),
    password_service: PasswordService = Depends(get_password_service),
):
    """
    List all password entries of an account, oldest first.
    """
    try:
        entries = await password_service.list_passwords(owner_id)
    except VaultError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return [PasswordResponse.from_entry(entry) for entry in entries]


@router.post(
    "",
    response_model=PasswordResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create password entry",
)
async def create_password(
    body: PasswordCreate,
    password_service: PasswordService = Depends(get_password_service),
):
    """
    Store a new password entry. The password is hashed before it is saved.

    - **owner_id**: Owning account ID (required)
    - **category**: Social, Work, Banking or Other (default: Other)
    - **service_name**: Service name (required)
    - **username**: Login on that service (required)
    - **password**: Secret (required)
    - **notes**, **tags**: Optional
    """
    try:
        entry = await password_service.create_password(body)
    except VaultError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return PasswordResponse.from_entry(entry)


@router.get(
    "/{password_id}",
    response_model=PasswordResponse,
    summary="Get password entry",
)
async def get_password(
    password_id: str,
    password_service: PasswordService = Depends(get_password_service),
):
    """
    Get a single password entry.
    """
    try:
        entry = await password_service.get_password(password_id)
    except VaultError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return PasswordResponse.from_entry(entry)


@router.patch(
    "/{password_id}",
    response_model=PasswordResponse,
    summary="Update password entry",
)
async def update_password(
    password_id: str,
    body: PasswordUpdate,
    password_service: PasswordService = Depends(get_password_service),
):
    """
    Update any subset of fields. Sending `password` replaces the stored hash.

    `owner_id` and `created_at` cannot be changed.
    """
    try:
        entry = await password_service.edit_password(password_id, body)
    except VaultError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return PasswordResponse.from_entry(entry)


@router.delete(
    "/{password_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete password entry",
)
async def delete_password(
    password_id: str,
    password_service: PasswordService = Depends(get_password_service),
):
    """
    Delete a password entry.

    **Warning**: This action cannot be undone.
    """
    try:
        await password_service.delete_password(password_id)
    except VaultError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{password_id}/verify",
    response_model=PasswordVerifyResponse,
    summary="Check a password against an entry",
)
async def verify_password(
    password_id: str,
    body: PasswordVerifyRequest,
    password_service: PasswordService = Depends(get_password_service),
):
    """
    Compare a candidate password with the stored hash.

    Stored passwords cannot be read back; this is the only way to check one.
    """
    try:
        match = await password_service.verify_password(password_id, body.password)
    except VaultError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return PasswordVerifyResponse(match=match)
