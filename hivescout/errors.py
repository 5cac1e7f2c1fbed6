"""
HiveScout Error Handling
========================

Errors raised at the package boundary: bad rule definitions and
unreadable window tables. Everything inside the signature math is
handled as data (see hivescout.utils.engine_output), never raised.
"""

import logging
import traceback
import uuid
from typing import Optional

logger = logging.getLogger(__name__)


class HiveScoutError(Exception):
    """
    User-safe error with internal logging.

    The message is safe to print. Internal details (the wrapped
    exception, if any) are logged with a short error id.
    """

    def __init__(self, user_message: str, internal_error: Optional[Exception] = None):
        """
        Create a safe error.

        Args:
            user_message: Message safe to show to users
            internal_error: Optional internal exception (logged only)
        """
        self.user_message = user_message
        self.error_id = str(uuid.uuid4())[:8]

        if internal_error:
            logger.error(
                f"Error {self.error_id}: {user_message}\n"
                f"Internal: {internal_error}"
            )
        else:
            logger.error(f"Error {self.error_id}: {user_message}")

        super().__init__(user_message)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "error": self.user_message,
            "error_id": self.error_id,
        }


class RuleConfigError(HiveScoutError):
    """Invalid approach rule definition or rule file."""


class IntakeError(HiveScoutError):
    """Window table is unreadable or missing required columns."""


# Mapping of internal exceptions to user-safe messages
SAFE_MESSAGES = {
    FileNotFoundError: "File not found",
    PermissionError: "Access denied",
    ValueError: "Invalid input",
    TypeError: "Invalid data type",
    KeyError: "Missing required field",
}


def get_safe_message(error: Exception) -> str:
    """
    Get a user-safe message for an exception.

    HiveScoutError subclasses carry their own message; other known
    exception types map through SAFE_MESSAGES.
    """
    if isinstance(error, HiveScoutError):
        return error.user_message

    for error_type, message in SAFE_MESSAGES.items():
        if isinstance(error, error_type):
            return message

    return "An error occurred"


def log_error(error: Exception, context: str = "") -> str:
    """
    Log an error and return an error ID for reference.

    Args:
        error: The exception to log
        context: Optional context string

    Returns:
        Error ID for support reference
    """
    if isinstance(error, HiveScoutError):
        return error.error_id

    error_id = str(uuid.uuid4())[:8]
    logger.error(
        f"Error {error_id}"
        + (f" ({context})" if context else "")
        + f": {error}\n{traceback.format_exc()}"
    )
    return error_id
