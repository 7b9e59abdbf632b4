"""
Credential Vault Backend - FastAPI Application

Account registration/login and per-account password entries, stored in
MongoDB with every secret kept as a one-way bcrypt hash.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.core.logging_config import setup_logging
from app.core.security import check_hashing_backend
from app.database.connections import get_mongo_client, close_connections
from app.database.registry import sync_registry, create_indexes
from app.routers import auth, health, passwords

logger = logging.getLogger(__name__)

APP_NAME = "Credential Vault API"
APP_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Configure logging
    - Self-check the password hashing backend (fatal on failure)
    - Sync database registry and create indexes

    Shutdown:
    - Close the database connection
    """
    setup_logging()
    logger.info("Starting up %s...", APP_NAME)

    check_hashing_backend()

    try:
        client = await get_mongo_client()
        await sync_registry(client)
        await create_indexes(client)
        logger.info("Database registry synced and indexes created")
    except Exception as e:
        logger.warning("Database initialization warning: %s", e)

    yield

    logger.info("Shutting down %s...", APP_NAME)
    await close_connections()
    logger.info("Database connections closed")


# Create FastAPI application
app = FastAPI(
    title=APP_NAME,
    description="""
## Credential Vault API

Stores login credentials for other services on behalf of registered accounts.

### Features
- **Authentication**: Register and log in with email and password
- **Passwords**: Create, list, read, update and delete password entries
- **Verification**: Check a candidate password against a stored entry

### Storage
Passwords are hashed with bcrypt before they are saved. They cannot be
read back, only verified. Listings never include hash material.
    """,
    version=APP_VERSION,
    lifespan=lifespan,
)

# Configure CORS
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Malformed request input is a client error like any other ValidationError
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(passwords.router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
