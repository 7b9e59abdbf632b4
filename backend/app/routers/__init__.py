"""
API Routers module.
"""
from app.routers import auth, health, passwords

__all__ = ["auth", "health", "passwords"]
