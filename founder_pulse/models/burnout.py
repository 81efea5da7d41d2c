"""Burnout score result and its per-user history in Redis."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

import redis

BURNOUT_PREFIX = "burnout:"

# Keep the most recent calculations only
BURNOUT_HISTORY_LIMIT = 90


class RiskLevel:
    LOW = "low"
    CAUTION = "caution"
    HIGH = "high"
    CRITICAL = "critical"

    ALL = (LOW, CAUTION, HIGH, CRITICAL)


@dataclass(frozen=True)
class BurnoutResult:
    score: int                      # 0-100
    risk_level: str
    contributing_factors: tuple = ()

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "risk_level": self.risk_level,
            "contributing_factors": list(self.contributing_factors),
        }


@dataclass
class BurnoutRecord:
    """A BurnoutResult as saved for a user at a point in time."""
    user_id: str
    result: BurnoutResult
    entry_id: str = ""
    calculated_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict:
        d = self.result.to_dict()
        d.update({
            "user_id": self.user_id,
            "entry_id": self.entry_id,
            "calculated_at": self.calculated_at,
        })
        return d

    @classmethod
    def from_dict(cls, data: dict) -> BurnoutRecord:
        return cls(
            user_id=data["user_id"],
            result=BurnoutResult(
                score=int(data["score"]),
                risk_level=data["risk_level"],
                contributing_factors=tuple(data.get("contributing_factors", [])),
            ),
            entry_id=data.get("entry_id", ""),
            calculated_at=data.get("calculated_at", ""),
        )

    def to_redis(self, r: redis.Redis) -> None:
        key = f"{BURNOUT_PREFIX}{self.user_id}"
        pipe = r.pipeline(transaction=True)
        pipe.lpush(key, json.dumps(self.to_dict()))
        pipe.ltrim(key, 0, BURNOUT_HISTORY_LIMIT - 1)
        pipe.execute()

    @classmethod
    def latest_from_redis(cls, r: redis.Redis, user_id: str) -> Optional[BurnoutRecord]:
        payload = r.lindex(f"{BURNOUT_PREFIX}{user_id}", 0)
        if not payload:
            return None
        return cls.from_dict(json.loads(payload))
