"""
Logging configuration.

Usage:
    from app.core.logging_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""
import logging
import sys

from app.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Third-party loggers that follow the application level
_FOLLOWERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# Handler installed by setup_logging, reused on repeat calls
_handler: logging.Handler | None = None


def _parse_level(value: str) -> int:
    """Convert a level name to a logging constant, defaulting to INFO."""
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging() -> None:
    """Configure the root logger from application settings."""
    global _handler

    settings = get_settings()
    level = _parse_level(settings.log_level)

    root = logging.getLogger()
    root.setLevel(level)

    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if _handler not in root.handlers:
        root.addHandler(_handler)

    for name in _FOLLOWERS:
        logging.getLogger(name).setLevel(level)

    # pymongo heartbeat chatter is noise below WARNING
    logging.getLogger("pymongo").setLevel(max(level, logging.WARNING))
