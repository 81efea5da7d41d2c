"""Shared Redis plumbing for the engine's persistence calls.

Every store function takes an optional ``r`` client; callers that omit it
get a fresh connection from REDIS_URL. Redis errors are logged with full
detail here and re-raised as an opaque PersistenceFailure.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date, datetime, timezone
from typing import Iterator

import redis

from founder_pulse.config.settings import REDIS_URL
from founder_pulse.errors import PersistenceFailure, ValidationError

logger = logging.getLogger(__name__)


def connect() -> redis.Redis:
    return redis.Redis.from_url(REDIS_URL, decode_responses=True)


@contextmanager
def persistence_guard(operation: str) -> Iterator[None]:
    """Turn a failed store call into PersistenceFailure after logging it."""
    try:
        yield
    except redis.RedisError as exc:
        logger.exception("Store failure during %s", operation)
        raise PersistenceFailure(cause=exc) from exc


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def as_iso_date(value: date | str) -> str:
    """Normalize a date or ISO string to YYYY-MM-DD."""
    if isinstance(value, str):
        try:
            return date.fromisoformat(value).isoformat()
        except ValueError:
            raise ValidationError(f"Invalid date: {value!r}") from None
    return value.isoformat()
