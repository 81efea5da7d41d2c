"""Action items — the daily micro-actions assigned to a user.

Created in a batch for one assignment date, mutated only by completion,
and deleted as a whole day when the batch is regenerated.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timezone
from typing import Optional

import redis

ACTION_PREFIX = "action:"
DAY_ACTIONS_PREFIX = "actions:"
ACTION_DATES_PREFIX = "action_dates:"


def day_key(user_id: str, assigned_date: str) -> str:
    return f"{DAY_ACTIONS_PREFIX}{user_id}:{assigned_date}"


class ActionCategory:
    MINDFULNESS = "mindfulness"
    SOCIAL = "social"
    PHYSICAL = "physical"
    PROFESSIONAL = "professional"
    REST = "rest"

    ALL = (MINDFULNESS, SOCIAL, PHYSICAL, PROFESSIONAL, REST)


@dataclass
class ActionItem:
    action_id: str
    user_id: str
    text: str
    category: str
    assigned_date: str              # ISO date, YYYY-MM-DD
    target_dimension: str = ""
    completed: bool = False
    completed_at: str = ""          # ISO 8601, empty until completed
    position: int = 0               # order within the day's batch
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict:
        d = asdict(self)
        d["completed"] = int(self.completed)
        return d

    @classmethod
    def from_dict(cls, data: dict) -> ActionItem:
        data = dict(data)
        if "completed" in data:
            data["completed"] = str(data["completed"]) in ("1", "True", "true")
        if "position" in data:
            data["position"] = int(data["position"])
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    def to_redis(self, r: redis.Redis) -> None:
        """Persist the action and register it under its (user, date) batch."""
        ordinal = date.fromisoformat(self.assigned_date).toordinal()
        pipe = r.pipeline(transaction=True)
        pipe.hset(f"{ACTION_PREFIX}{self.action_id}", mapping=self.to_dict())
        pipe.sadd(day_key(self.user_id, self.assigned_date), self.action_id)
        pipe.zadd(f"{ACTION_DATES_PREFIX}{self.user_id}", {self.assigned_date: ordinal})
        pipe.execute()

    @classmethod
    def from_redis(cls, r: redis.Redis, action_id: str) -> Optional[ActionItem]:
        data = r.hgetall(f"{ACTION_PREFIX}{action_id}")
        if not data:
            return None
        return cls.from_dict(data)

    @classmethod
    def for_day(cls, r: redis.Redis, user_id: str, assigned_date: str) -> list[ActionItem]:
        """All actions in a user's batch for one date, in selection order."""
        actions = []
        for action_id in r.smembers(day_key(user_id, assigned_date)):
            action = cls.from_redis(r, action_id)
            if action:
                actions.append(action)
        actions.sort(key=lambda a: (a.position, a.created_at))
        return actions

    @classmethod
    def delete_day(cls, r: redis.Redis, user_id: str, assigned_date: str) -> int:
        """Remove a user's whole batch for one date. Returns the count removed."""
        key = day_key(user_id, assigned_date)
        action_ids = list(r.smembers(key))
        pipe = r.pipeline(transaction=True)
        for action_id in action_ids:
            pipe.delete(f"{ACTION_PREFIX}{action_id}")
        pipe.delete(key)
        pipe.zrem(f"{ACTION_DATES_PREFIX}{user_id}", assigned_date)
        pipe.execute()
        return len(action_ids)

    @classmethod
    def dates_between(cls, r: redis.Redis, user_id: str, start: date, end: date) -> list[str]:
        """Assignment dates with a batch in [start, end], inclusive."""
        return list(r.zrangebyscore(
            f"{ACTION_DATES_PREFIX}{user_id}", start.toordinal(), end.toordinal()
        ))
