"""Psychological scores and the persisted assessment record.

Scores are derived once from a 25-answer questionnaire and never change.
The Assessment record stores the answers, the scores and the archetype name
in a Redis hash, indexed per user by creation time.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Optional

import redis

ASSESSMENT_PREFIX = "assessment:"
USER_ASSESSMENTS_PREFIX = "assessments:"


class MotivationType:
    INTRINSIC = "intrinsic"
    EXTRINSIC = "extrinsic"
    MIXED = "mixed"

    ALL = (INTRINSIC, EXTRINSIC, MIXED)


# The six numeric dimensions, in questionnaire order
NUMERIC_DIMENSIONS = (
    "imposter_syndrome",
    "founder_doubt",
    "identity_fusion",
    "fear_of_rejection",
    "risk_tolerance",
    "isolation_level",
)

# Dimensions where a high score is a warning sign (risk_tolerance is not one)
NEGATIVE_DIMENSIONS = (
    "imposter_syndrome",
    "founder_doubt",
    "identity_fusion",
    "fear_of_rejection",
    "isolation_level",
)


@dataclass(frozen=True)
class PsychologicalScores:
    imposter_syndrome: int
    founder_doubt: int
    identity_fusion: int
    fear_of_rejection: int
    risk_tolerance: int
    isolation_level: int
    motivation_type: str = MotivationType.MIXED

    def numeric(self) -> dict[str, int]:
        """The six numeric dimensions keyed by name."""
        return {name: getattr(self, name) for name in NUMERIC_DIMENSIONS}

    def high_dimensions(self, threshold: int = 70) -> list[str]:
        """Negative dimensions strictly above ``threshold``, in fixed order."""
        return [name for name in NEGATIVE_DIMENSIONS if getattr(self, name) > threshold]

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> PsychologicalScores:
        values = {name: int(data[name]) for name in NUMERIC_DIMENSIONS}
        values["motivation_type"] = data.get("motivation_type", MotivationType.MIXED)
        return cls(**values)


@dataclass
class Assessment:
    assessment_id: str
    user_id: str
    answers: list
    scores: PsychologicalScores
    archetype: str
    insights: str = ""
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    updated_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict:
        d = {
            "assessment_id": self.assessment_id,
            "user_id": self.user_id,
            "answers": json.dumps(self.answers),
            "archetype": self.archetype,
            "insights": self.insights,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        d.update(self.scores.to_dict())
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Assessment:
        data = dict(data)
        answers = data.get("answers", "[]")
        if isinstance(answers, str):
            answers = json.loads(answers)
        return cls(
            assessment_id=data["assessment_id"],
            user_id=data["user_id"],
            answers=answers,
            scores=PsychologicalScores.from_dict(data),
            archetype=data["archetype"],
            insights=data.get("insights", ""),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at", ""),
        )

    def to_redis(self, r: redis.Redis) -> None:
        """Persist the assessment and index it under its user."""
        created = datetime.fromisoformat(self.created_at).timestamp()
        pipe = r.pipeline(transaction=True)
        pipe.hset(f"{ASSESSMENT_PREFIX}{self.assessment_id}", mapping=self.to_dict())
        pipe.zadd(f"{USER_ASSESSMENTS_PREFIX}{self.user_id}", {self.assessment_id: created})
        pipe.execute()

    @classmethod
    def from_redis(cls, r: redis.Redis, assessment_id: str) -> Optional[Assessment]:
        data = r.hgetall(f"{ASSESSMENT_PREFIX}{assessment_id}")
        if not data:
            return None
        return cls.from_dict(data)

    @classmethod
    def latest_for_user(cls, r: redis.Redis, user_id: str) -> Optional[Assessment]:
        newest = r.zrevrange(f"{USER_ASSESSMENTS_PREFIX}{user_id}", 0, 0)
        if not newest:
            return None
        return cls.from_redis(r, newest[0])

    @classmethod
    def count_for_user(cls, r: redis.Redis, user_id: str) -> int:
        return int(r.zcard(f"{USER_ASSESSMENTS_PREFIX}{user_id}"))
