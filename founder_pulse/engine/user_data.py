"""Per-user data export and erasure, plus the retention sweep.

Everything a user owns is reachable from three per-user indexes
(``assessments:{user}``, ``checkins:{user}``, ``action_dates:{user}``) and
the ``burnout:{user}`` list, so none of these functions scan hashes.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from datetime import date, datetime, timedelta, timezone
from typing import Optional

import redis

from founder_pulse.config.settings import DATA_RETENTION_DAYS
from founder_pulse.engine import store
from founder_pulse.errors import ValidationError
from founder_pulse.models.action import ACTION_DATES_PREFIX, ActionItem
from founder_pulse.models.assessment import ASSESSMENT_PREFIX, USER_ASSESSMENTS_PREFIX, Assessment
from founder_pulse.models.burnout import BURNOUT_PREFIX
from founder_pulse.models.checkin import USER_CHECKINS_PREFIX, CheckInEntry

logger = logging.getLogger(__name__)


def _get_redis() -> redis.Redis:
    return store.connect()


def _require_user(user_id: str) -> None:
    if not user_id or not user_id.strip():
        raise ValidationError("User ID is required")


def _assessment_to_dict(a: Assessment) -> dict:
    d = a.to_dict()
    d["answers"] = a.answers
    return d


def export_user_data(user_id: str, r: redis.Redis | None = None) -> dict:
    """Everything stored for ``user_id`` as plain JSON-ready data, oldest first."""
    _require_user(user_id)
    r = r or _get_redis()

    with store.persistence_guard("export_user_data"):
        assessments = [
            Assessment.from_redis(r, assessment_id)
            for assessment_id in r.zrange(f"{USER_ASSESSMENTS_PREFIX}{user_id}", 0, -1)
        ]
        entries = [
            CheckInEntry.from_redis(r, user_id, day)
            for day in r.zrange(f"{USER_CHECKINS_PREFIX}{user_id}", 0, -1)
        ]
        burnout = [json.loads(p) for p in r.lrange(f"{BURNOUT_PREFIX}{user_id}", 0, -1)]
        actions = [
            action
            for day in r.zrange(f"{ACTION_DATES_PREFIX}{user_id}", 0, -1)
            for action in ActionItem.for_day(r, user_id, day)
        ]

    data = {
        "user_id": user_id,
        "assessments": [_assessment_to_dict(a) for a in assessments if a],
        "journal_entries": [e.to_dict() for e in entries if e],
        "burnout_scores": list(reversed(burnout)),
        "action_items": [asdict(a) for a in actions],
        "exported_at": datetime.now(timezone.utc).isoformat(),
    }
    data["counts"] = {
        kind: len(data[kind])
        for kind in ("assessments", "journal_entries", "burnout_scores", "action_items")
    }
    logger.info("Exported data for %s: %s", user_id, data["counts"])
    return data


def delete_all_user_data(user_id: str, r: redis.Redis | None = None) -> dict[str, int]:
    """Erase every record owned by ``user_id``. Returns counts per kind."""
    _require_user(user_id)
    r = r or _get_redis()
    counts = {"assessments": 0, "journal_entries": 0, "burnout_scores": 0, "action_items": 0}

    with store.persistence_guard("delete_all_user_data"):
        assessments_key = f"{USER_ASSESSMENTS_PREFIX}{user_id}"
        assessment_ids = r.zrange(assessments_key, 0, -1)
        pipe = r.pipeline(transaction=True)
        for assessment_id in assessment_ids:
            pipe.delete(f"{ASSESSMENT_PREFIX}{assessment_id}")
        pipe.delete(assessments_key)
        pipe.execute()
        counts["assessments"] = len(assessment_ids)

        checkins_key = f"{USER_CHECKINS_PREFIX}{user_id}"
        for day in r.zrange(checkins_key, 0, -1):
            entry = CheckInEntry.from_redis(r, user_id, day)
            if entry:
                CheckInEntry.delete_from_redis(r, entry)
                counts["journal_entries"] += 1
        r.delete(checkins_key)

        burnout_key = f"{BURNOUT_PREFIX}{user_id}"
        counts["burnout_scores"] = r.llen(burnout_key)
        r.delete(burnout_key)

        for day in r.zrange(f"{ACTION_DATES_PREFIX}{user_id}", 0, -1):
            counts["action_items"] += ActionItem.delete_day(r, user_id, day)
        r.delete(f"{ACTION_DATES_PREFIX}{user_id}")

    logger.info("Deleted all data for %s: %s", user_id, counts)
    return counts


def _calculated_on(payload: str) -> Optional[date]:
    calculated_at = json.loads(payload).get("calculated_at", "")
    if not calculated_at:
        return None
    return datetime.fromisoformat(calculated_at).date()


def _trim_burnout_history(r: redis.Redis, key: str, cutoff: date) -> int:
    """Drop the tail of a newest-first burnout list dated before ``cutoff``."""
    payloads = r.lrange(key, 0, -1)
    keep = len(payloads)
    while keep > 0:
        calculated = _calculated_on(payloads[keep - 1])
        if calculated is None or calculated >= cutoff:
            break
        keep -= 1

    removed = len(payloads) - keep
    if removed:
        if keep:
            r.ltrim(key, 0, keep - 1)
        else:
            r.delete(key)
    return removed


def cleanup_old_data(
    retention_days: int = DATA_RETENTION_DAYS,
    today: Optional[date] = None,
    r: redis.Redis | None = None,
) -> dict[str, int]:
    """Purge check-ins, burnout scores and action batches dated before
    ``today - retention_days`` for every user. Assessments are kept.

    Users are found through their date indexes, so the sweep touches only
    keys that hold old data.
    """
    if isinstance(retention_days, bool) or not isinstance(retention_days, int) or retention_days < 1:
        raise ValidationError("retention_days must be a positive number")

    r = r or _get_redis()
    cutoff = (today or store.utc_today()) - timedelta(days=retention_days)
    before_cutoff = f"({cutoff.toordinal()}"
    counts = {"journal_entries": 0, "burnout_scores": 0, "action_items": 0}

    with store.persistence_guard("cleanup_old_data"):
        for key in r.scan_iter(f"{USER_CHECKINS_PREFIX}*"):
            user_id = key[len(USER_CHECKINS_PREFIX):]
            for day in r.zrangebyscore(key, "-inf", before_cutoff):
                entry = CheckInEntry.from_redis(r, user_id, day)
                if entry:
                    CheckInEntry.delete_from_redis(r, entry)
                    counts["journal_entries"] += 1
                else:
                    r.zrem(key, day)

        for key in r.scan_iter(f"{ACTION_DATES_PREFIX}*"):
            user_id = key[len(ACTION_DATES_PREFIX):]
            for day in r.zrangebyscore(key, "-inf", before_cutoff):
                counts["action_items"] += ActionItem.delete_day(r, user_id, day)

        for key in r.scan_iter(f"{BURNOUT_PREFIX}*"):
            counts["burnout_scores"] += _trim_burnout_history(r, key, cutoff)

    logger.info("Data cleanup before %s completed: %s", cutoff.isoformat(), counts)
    return counts
