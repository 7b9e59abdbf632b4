"""
Application configuration loaded from environment variables.
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # MongoDB
    mongo_uri: str = "mongodb://mongodb:27017"
    mongo_server_selection_timeout_ms: int = 5000

    # Password hashing work factor (bcrypt cost, 2^rounds iterations)
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # Logging
    log_level: str = "INFO"

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 5000
    cors_allow_origins: list[str] = ["*"]

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
