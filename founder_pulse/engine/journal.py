"""Check-in journal — one mood/energy/stress entry per user per day.

``check_in_and_score`` is the full pipeline run after a check-in:
upsert → latest assessment → recent history → trends → burnout → save.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

import redis

from founder_pulse.config.settings import HISTORY_WINDOW_DAYS, NOTES_MAX_LENGTH
from founder_pulse.engine import store
from founder_pulse.engine.burnout import compute_burnout_score, save_burnout_score
from founder_pulse.engine.trends import compute_trends
from founder_pulse.engine.utils import round_half_up
from founder_pulse.errors import NotFoundError, ValidationError
from founder_pulse.models.assessment import Assessment
from founder_pulse.models.burnout import BurnoutResult
from founder_pulse.models.checkin import USER_CHECKINS_PREFIX, CheckInEntry

logger = logging.getLogger(__name__)

MIN_METRIC = 0
MAX_METRIC = 100


def _get_redis() -> redis.Redis:
    return store.connect()


def _require_user(user_id: object) -> None:
    if not isinstance(user_id, str) or not user_id.strip():
        raise ValidationError("userId is required and must be a non-empty string")


def _validate_metric(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
        raise ValidationError(f"{name} must be a number")
    if value < MIN_METRIC or value > MAX_METRIC:
        raise ValidationError(f"{name} must be between {MIN_METRIC} and {MAX_METRIC}")


def validate_check_in(
    user_id: object,
    mood: object,
    energy: object,
    stress: object,
    notes: object = None,
) -> None:
    """Raise ValidationError naming the first bad field."""
    _require_user(user_id)
    _validate_metric("mood", mood)
    _validate_metric("energy", energy)
    _validate_metric("stress", stress)
    if notes is not None:
        if not isinstance(notes, str):
            raise ValidationError("notes must be a string")
        if len(notes) > NOTES_MAX_LENGTH:
            raise ValidationError(f"notes must not exceed {NOTES_MAX_LENGTH} characters")


def record_check_in(
    user_id: str,
    mood: float,
    energy: float,
    stress: float,
    notes: Optional[str] = None,
    entry_date: date | str | None = None,
    r: redis.Redis | None = None,
) -> CheckInEntry:
    """Create or overwrite the user's entry for ``entry_date`` (default today).

    An existing entry keeps its id and created_at.
    """
    validate_check_in(user_id, mood, energy, stress, notes)
    r = r or _get_redis()
    day = store.as_iso_date(entry_date or store.utc_today())
    now = datetime.now(timezone.utc).isoformat()

    with store.persistence_guard("record_check_in"):
        existing = CheckInEntry.from_redis(r, user_id, day)
        entry = CheckInEntry(
            entry_id=existing.entry_id if existing else f"entry-{uuid4().hex[:12]}",
            user_id=user_id,
            entry_date=day,
            mood=round_half_up(mood),
            energy=round_half_up(energy),
            stress=round_half_up(stress),
            notes=notes or "",
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        entry.to_redis(r)

    logger.info(
        "Check-in %s for %s on %s",
        "updated" if existing else "created", user_id, day,
    )
    return entry


def get_entry_by_date(
    user_id: str,
    entry_date: date | str,
    r: redis.Redis | None = None,
) -> Optional[CheckInEntry]:
    _require_user(user_id)
    r = r or _get_redis()
    with store.persistence_guard("get_entry_by_date"):
        return CheckInEntry.from_redis(r, user_id, store.as_iso_date(entry_date))


def get_history(
    user_id: str,
    days: int = HISTORY_WINDOW_DAYS,
    today: Optional[date] = None,
    r: redis.Redis | None = None,
) -> list[CheckInEntry]:
    """Entries dated within [today - days, today], most recent first."""
    _require_user(user_id)
    if isinstance(days, bool) or not isinstance(days, int) or days < 1:
        raise ValidationError("days must be a positive number")

    r = r or _get_redis()
    end = today or store.utc_today()
    start = end - timedelta(days=days)

    with store.persistence_guard("get_history"):
        dates = r.zrevrangebyscore(
            f"{USER_CHECKINS_PREFIX}{user_id}", end.toordinal(), start.toordinal()
        )
        entries = [CheckInEntry.from_redis(r, user_id, d) for d in dates]
    return [e for e in entries if e is not None]


def delete_entry(
    entry_id: str,
    user_id: str,
    r: redis.Redis | None = None,
) -> None:
    """Delete one of the user's entries. NotFoundError if missing or not theirs."""
    _require_user(user_id)
    if not entry_id:
        raise ValidationError("Entry ID is required")

    r = r or _get_redis()
    with store.persistence_guard("delete_entry"):
        ref = CheckInEntry.locate(r, entry_id)
        entry = CheckInEntry.from_redis(r, *ref) if ref else None
        if entry is None or entry.user_id != user_id or entry.entry_id != entry_id:
            raise NotFoundError("Entry not found")
        CheckInEntry.delete_from_redis(r, entry)

    logger.info("Deleted check-in %s for %s", entry_id, user_id)


def check_in_and_score(
    user_id: str,
    mood: float,
    energy: float,
    stress: float,
    notes: Optional[str] = None,
    entry_date: date | str | None = None,
    r: redis.Redis | None = None,
) -> tuple[CheckInEntry, BurnoutResult]:
    r = r or _get_redis()
    entry = record_check_in(user_id, mood, energy, stress, notes, entry_date, r)

    with store.persistence_guard("load_latest_assessment"):
        assessment = Assessment.latest_for_user(r, user_id)

    history = get_history(
        user_id, HISTORY_WINDOW_DAYS, date.fromisoformat(entry.entry_date), r
    )
    trends = compute_trends(history)

    result = compute_burnout_score(entry, assessment, trends)
    save_burnout_score(user_id, result, entry.entry_id, r)
    return entry, result
