"""Daily check-in entries and the trend summary derived from them.

One entry per user per calendar day. The Redis key is built from
(user, date), so writing the same day twice overwrites instead of appending.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timezone
from typing import Optional

import redis

CHECKIN_PREFIX = "checkin:"
CHECKIN_ID_PREFIX = "checkin_id:"
USER_CHECKINS_PREFIX = "checkins:"


def checkin_key(user_id: str, entry_date: str) -> str:
    return f"{CHECKIN_PREFIX}{user_id}:{entry_date}"


class TrendDirection:
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


@dataclass
class CheckInEntry:
    entry_id: str
    user_id: str
    entry_date: str                 # ISO date, YYYY-MM-DD
    mood: int
    energy: int
    stress: int
    notes: str = ""
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    updated_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> CheckInEntry:
        data = dict(data)
        for int_field in ("mood", "energy", "stress"):
            if int_field in data:
                data[int_field] = int(data[int_field])
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    def to_redis(self, r: redis.Redis) -> None:
        """Upsert the entry for (user, date) and index it."""
        ordinal = date.fromisoformat(self.entry_date).toordinal()
        pipe = r.pipeline(transaction=True)
        pipe.hset(checkin_key(self.user_id, self.entry_date), mapping=self.to_dict())
        pipe.zadd(f"{USER_CHECKINS_PREFIX}{self.user_id}", {self.entry_date: ordinal})
        pipe.set(f"{CHECKIN_ID_PREFIX}{self.entry_id}", f"{self.user_id}|{self.entry_date}")
        pipe.execute()

    @classmethod
    def from_redis(cls, r: redis.Redis, user_id: str, entry_date: str) -> Optional[CheckInEntry]:
        data = r.hgetall(checkin_key(user_id, entry_date))
        if not data:
            return None
        return cls.from_dict(data)

    @classmethod
    def locate(cls, r: redis.Redis, entry_id: str) -> Optional[tuple[str, str]]:
        """Return (user_id, entry_date) for an entry id, if known."""
        ref = r.get(f"{CHECKIN_ID_PREFIX}{entry_id}")
        if not ref:
            return None
        user_id, _, entry_date = ref.rpartition("|")
        return user_id, entry_date

    @classmethod
    def delete_from_redis(cls, r: redis.Redis, entry: CheckInEntry) -> None:
        pipe = r.pipeline(transaction=True)
        pipe.delete(checkin_key(entry.user_id, entry.entry_date))
        pipe.zrem(f"{USER_CHECKINS_PREFIX}{entry.user_id}", entry.entry_date)
        pipe.delete(f"{CHECKIN_ID_PREFIX}{entry.entry_id}")
        pipe.execute()


@dataclass(frozen=True)
class TrendSummary:
    mood_avg: int = 0
    energy_avg: int = 0
    stress_avg: int = 0
    mood_trend: str = TrendDirection.STABLE
    energy_trend: str = TrendDirection.STABLE
    stress_trend: str = TrendDirection.STABLE

    @property
    def has_declining(self) -> bool:
        """True if any metric is getting worse (stress polarity already inverted)."""
        return TrendDirection.DECLINING in (self.mood_trend, self.energy_trend, self.stress_trend)

    def to_dict(self) -> dict:
        return asdict(self)
