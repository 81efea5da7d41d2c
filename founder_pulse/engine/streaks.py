"""Completion/Streak Tracker — marking actions done and summarising progress."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Optional

import redis

from founder_pulse.config.settings import STATS_WINDOW_DAYS, STREAK_LOOKBACK_DAYS
from founder_pulse.engine import store
from founder_pulse.engine.utils import safe_percentage
from founder_pulse.errors import NotFoundError, ValidationError
from founder_pulse.models.action import ACTION_PREFIX, ActionItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionStats:
    total_actions: int = 0
    completed_actions: int = 0
    completion_rate: int = 0        # 0-100
    streak_days: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def _get_redis() -> redis.Redis:
    return store.connect()


def complete_action(
    action_id: str,
    user_id: str,
    r: redis.Redis | None = None,
) -> ActionItem:
    """Mark an action completed for its owner.

    Raises NotFoundError when the id is unknown or belongs to another user.
    """
    if not action_id or not action_id.strip():
        raise ValidationError("Action ID is required")
    if not user_id or not user_id.strip():
        raise ValidationError("User ID is required")

    r = r or _get_redis()
    key = f"{ACTION_PREFIX}{action_id}"
    with store.persistence_guard("complete_action"), r.pipeline() as pipe:
        # WATCH so a batch deleted mid-update is not recreated as a partial hash
        while True:
            try:
                pipe.watch(key)
                data = pipe.hgetall(key)
                action = ActionItem.from_dict(data) if data else None
                if action is None or action.user_id != user_id:
                    raise NotFoundError(
                        "Action not found or you do not have permission to update it"
                    )

                action.completed = True
                action.completed_at = datetime.now(timezone.utc).isoformat()
                pipe.multi()
                pipe.hset(key, mapping={"completed": 1, "completed_at": action.completed_at})
                pipe.execute()
                break
            except redis.WatchError:
                logger.debug("Action %s changed during completion, retrying", action_id)

    logger.info("Action %s completed by %s", action_id, user_id)
    return action


def calculate_streak(
    actions_by_date: dict[str, list[ActionItem]],
    today: date,
    lookback_days: int = STREAK_LOOKBACK_DAYS,
) -> int:
    """Consecutive days, ending today, with at least one completed action.

    Today is allowed to have no batch yet. Any earlier day without a batch,
    or any day (today included) whose batch has nothing completed, ends
    the streak.
    """
    streak = 0
    for i in range(lookback_days):
        day = (today - timedelta(days=i)).isoformat()
        day_actions = actions_by_date.get(day, [])

        if not day_actions:
            if i == 0:
                continue
            break

        if any(a.completed for a in day_actions):
            streak += 1
        else:
            break

    return streak


def _actions_by_date(
    r: redis.Redis, user_id: str, start: date, end: date
) -> dict[str, list[ActionItem]]:
    return {
        day: ActionItem.for_day(r, user_id, day)
        for day in ActionItem.dates_between(r, user_id, start, end)
    }


def compute_completion_stats(
    user_id: str,
    window_days: int = STATS_WINDOW_DAYS,
    today: Optional[date] = None,
    r: redis.Redis | None = None,
) -> CompletionStats:
    """Totals over [today - window_days, today] plus the current streak."""
    if window_days < 0:
        raise ValidationError("Window must be zero or more days")

    r = r or _get_redis()
    today = today or store.utc_today()
    lookback_start = today - timedelta(days=STREAK_LOOKBACK_DAYS - 1)
    window_start = today - timedelta(days=window_days)

    with store.persistence_guard("compute_completion_stats"):
        by_date = _actions_by_date(r, user_id, min(lookback_start, window_start), today)

    window_start_iso = window_start.isoformat()
    in_window = [
        action
        for day, actions in by_date.items()
        if day >= window_start_iso
        for action in actions
    ]
    completed = sum(1 for a in in_window if a.completed)

    return CompletionStats(
        total_actions=len(in_window),
        completed_actions=completed,
        completion_rate=safe_percentage(completed, len(in_window)),
        streak_days=calculate_streak(by_date, today),
    )
