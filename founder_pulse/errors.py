"""Error taxonomy shared by the engine, the stores and the API layer.

ValidationError and NotFoundError carry messages that are safe to show to
the caller. PersistenceFailure wraps a failed Redis call; its detail is
logged where it happens and the caller only ever sees a generic message.
"""

from __future__ import annotations

import re
from typing import Optional

SERVER_ERROR_MESSAGE = "Server error. Try again later."

# Patterns that must never reach a user-facing message
SENSITIVE_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in (
        r"redis",
        r"database",
        r"connection",
        r"api[_-]?key",
        r"secret",
        r"password",
        r"token",
        r"traceback",
        r"stack",
        r"internal",
        r"\.py:\d+",
        r"ECONNREFUSED",
        r"ETIMEDOUT",
    )
]


class FounderPulseError(Exception):
    """Base exception for engine errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FounderPulseError):
    """Malformed input: wrong answer count, out-of-range level, bad field."""
    pass


class NotFoundError(FounderPulseError):
    """Entity missing, or owned by someone else."""
    pass


class PersistenceFailure(FounderPulseError):
    """The store call itself failed."""

    def __init__(self, message: str = SERVER_ERROR_MESSAGE, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause


def contains_sensitive_info(message: str) -> bool:
    return any(p.search(message) for p in SENSITIVE_PATTERNS)


def sanitize_error_for_user(exc: BaseException, fallback: str = SERVER_ERROR_MESSAGE) -> str:
    """Return a message that is safe to hand back to a client."""
    if not isinstance(exc, (ValidationError, NotFoundError)):
        return fallback
    if contains_sensitive_info(exc.message):
        return fallback
    return exc.message
