"""
Logging Configuration Module.

Centralized logging for Sassify, built on ``logging.config.dictConfig``.
One console handler (and optionally a DEBUG file handler) hangs off the root
logger; per-module levels keep the billing webhook and AI services verbose
while database drivers and HTTP clients stay quiet.

Formats: ``simple``, ``detailed`` (default) and a JSON-like line format.
"""

import logging
import logging.config
import os
from pathlib import Path
from typing import Any, Dict, Optional


def _get_logging_config():
    """Read the logging settings, falling back to raw environment variables.

    The settings import is deferred so that importing this module never
    triggers a circular import during start-up.
    """
    env_format = os.getenv("LOG_FORMAT", "detailed")
    env_dir = os.getenv("LOG_FILE_DIR", "logs")
    try:
        from sassify.server.core.config import settings

        return settings.log_level.upper(), env_format, env_dir, settings.log_file_enabled
    except Exception:
        return (
            os.getenv("SASSIFY_LOG_LEVEL", "INFO").upper(),
            env_format,
            env_dir,
            os.getenv("ENABLE_FILE_LOGGING", "true").lower() in ("true", "1", "yes"),
        )


LOG_LEVEL, LOG_FORMAT, LOG_FILE_DIR, ENABLE_FILE_LOGGING = _get_logging_config()
LOG_FILE_NAME = "sassify.log"

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
    '"module": "%(filename)s", "function": "%(funcName)s", "line": %(lineno)d, '
    '"message": "%(message)s"}'
)

FORMATS = {"simple": SIMPLE_FORMAT, "detailed": DETAILED_FORMAT, "json": JSON_FORMAT}

MODULE_LOG_LEVELS = {
    "sassify": "INFO",
    "sassify.core.database": "INFO",
    "sassify.server": "INFO",
    "sassify.server.api": "DEBUG",
    "sassify.server.services": "DEBUG",
    "sassify.cli": "INFO",
    # Third-party libraries (reduce noise)
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "aiosqlite": "WARNING",
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "asyncio": "WARNING",
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
}


def build_logging_config(level: str, fmt: str, file_path: Optional[Path] = None) -> Dict[str, Any]:
    """Return the ``dictConfig`` schema for the given level and format name."""
    handlers: Dict[str, Any] = {
        "console": {"class": "logging.StreamHandler", "level": level, "formatter": "default"},
    }
    if file_path is not None:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "level": "DEBUG",
            "formatter": "default",
            "filename": str(file_path),
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": FORMATS.get(fmt, DETAILED_FORMAT), "datefmt": "%Y-%m-%d %H:%M:%S"},
        },
        "handlers": handlers,
        "loggers": {name: {"level": module_level} for name, module_level in MODULE_LOG_LEVELS.items()},
        # The root captures everything; each handler filters by its own level.
        "root": {"level": "DEBUG", "handlers": list(handlers)},
    }


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Override default log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Override default format (simple, detailed, json)
        enable_file: Whether to enable file logging
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT

    file_path = None
    if enable_file and ENABLE_FILE_LOGGING:
        Path(LOG_FILE_DIR).mkdir(parents=True, exist_ok=True)
        file_path = Path(LOG_FILE_DIR) / LOG_FILE_NAME

    logging.config.dictConfig(build_logging_config(level, fmt, file_path))
    logging.getLogger().info(f"Logging configured: level={level}, format={fmt}, file_logging={file_path is not None}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The module name (typically __name__)

    Returns:
        A configured logger instance
    """
    return logging.getLogger(name)
