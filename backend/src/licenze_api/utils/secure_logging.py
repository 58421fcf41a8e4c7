"""Logging helpers that keep connection strings and secrets out of logs."""

import logging
import re
from functools import lru_cache
from typing import Any

from licenze_api.config import get_settings

_PATH_RE = re.compile(r"['\"]?(/[a-zA-Z0-9_./\-]+|[A-Z]:\\[^\s'\"]+)['\"]?")
_URL_RE = re.compile(r"(postgresql|postgres|asyncpg|sqlite|redis|http|https)(\+\w+)?://[^\s]+")
_EMAIL_RE = re.compile(r"[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+")
_TOKEN_RE = re.compile(r"[a-zA-Z0-9_\-]{32,}")

MAX_MESSAGE_LENGTH = 200


@lru_cache(maxsize=1)
def is_debug_mode() -> bool:
    """Check if application is running in debug mode."""
    return get_settings().debug


def sanitize_exception_message(error: Exception) -> str:
    """Sanitize an exception message for production logs and run summaries.

    Removes file paths, database URLs, email addresses and long tokens,
    then truncates to ``MAX_MESSAGE_LENGTH`` characters.

    Args:
        error: The exception to sanitize

    Returns:
        Sanitized message
    """
    error_msg = str(error)
    error_msg = _URL_RE.sub("[URL]", error_msg)
    error_msg = _PATH_RE.sub("[PATH]", error_msg)
    error_msg = _EMAIL_RE.sub("[EMAIL]", error_msg)
    error_msg = _TOKEN_RE.sub("[TOKEN]", error_msg)

    if len(error_msg) > MAX_MESSAGE_LENGTH:
        error_msg = error_msg[: MAX_MESSAGE_LENGTH - 3] + "..."

    return error_msg


def describe_error(error: Exception) -> str:
    """Short, sanitized ``Type: message`` description of an exception."""
    message = sanitize_exception_message(error)
    if not message:
        return type(error).__name__
    return f"{type(error).__name__}: {message}"


def log_error(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
    **kwargs: Any,
) -> None:
    """Log an error with a detail level based on environment.

    In debug mode the full exception and traceback are logged.
    Otherwise only a sanitized message is written.

    Args:
        logger: The logger instance to use
        message: The log message (should be generic, no sensitive data)
        error: Optional exception to include
        **kwargs: Additional context passed as ``extra`` in debug mode
    """
    if is_debug_mode():
        if error:
            logger.error(f"{message}: {error}", exc_info=error, extra=kwargs)
        else:
            logger.error(message, extra=kwargs)
    elif error:
        logger.error(f"{message}: {describe_error(error)}")
    else:
        logger.error(message)


def log_warning(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
) -> None:
    """Log a warning, sanitizing the exception outside debug mode."""
    if error is None:
        logger.warning(message)
    elif is_debug_mode():
        logger.warning(f"{message}: {error}")
    else:
        logger.warning(f"{message}: {describe_error(error)}")
