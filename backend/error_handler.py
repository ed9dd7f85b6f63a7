# backend/error_handler.py
from typing import Optional

from backend.logging_config import get_logger

logger = get_logger(__name__)


class BackendError(RuntimeError):
    """A remote call succeeded but did not return what the caller needed."""


def error_message(exc: BaseException) -> str:
    """
    Human-readable message for a failed remote call.
    postgrest.APIError and the auth errors both carry .message.
    """
    msg = getattr(exc, "message", None)
    if isinstance(msg, str) and msg.strip():
        return msg.strip()
    text = str(exc).strip()
    return text or type(exc).__name__


def log_error(operation: str, exc: BaseException, context: Optional[dict] = None) -> str:
    """Log a failed operation and return the message the UI should show."""
    message = error_message(exc)
    if context:
        logger.error("%s failed: %s (%s)", operation, message, context)
    else:
        logger.error("%s failed: %s", operation, message)
    return message
