"""Assessment submission: score, classify, recommend, persist."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Sequence
from uuid import uuid4

import redis

from founder_pulse.engine import store
from founder_pulse.engine.archetype_classifier import classify_archetype, get_recommendations
from founder_pulse.engine.dimension_scorer import score_answers, validate_answers
from founder_pulse.errors import NotFoundError, ValidationError
from founder_pulse.models.archetype import ArchetypeResult
from founder_pulse.models.assessment import ASSESSMENT_PREFIX, Assessment, PsychologicalScores

logger = logging.getLogger(__name__)


@dataclass
class AssessmentOutcome:
    assessment_id: str
    scores: PsychologicalScores
    archetype: ArchetypeResult
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "assessment_id": self.assessment_id,
            "scores": self.scores.to_dict(),
            "archetype": self.archetype.to_dict(),
            "recommendations": list(self.recommendations),
        }


def _get_redis() -> redis.Redis:
    return store.connect()


def submit_assessment(
    user_id: str,
    answers: Sequence,
    r: redis.Redis | None = None,
) -> AssessmentOutcome:
    if not isinstance(user_id, str) or not user_id.strip():
        raise ValidationError("User ID is required")

    levels = validate_answers(answers)
    scores = score_answers(levels)
    archetype = classify_archetype(scores)
    recommendations = get_recommendations(scores, archetype.name)

    assessment = Assessment(
        assessment_id=f"assessment-{uuid4().hex[:12]}",
        user_id=user_id,
        answers=levels,
        scores=scores,
        archetype=archetype.name,
    )
    r = r or _get_redis()
    with store.persistence_guard("submit_assessment"):
        assessment.to_redis(r)

    logger.info("Assessment %s saved for %s (%s)", assessment.assessment_id, user_id, archetype.name)
    return AssessmentOutcome(
        assessment_id=assessment.assessment_id,
        scores=scores,
        archetype=archetype,
        recommendations=recommendations,
    )


def attach_insights(
    assessment_id: str,
    insights: str,
    r: redis.Redis | None = None,
) -> None:
    """Store generated insight text on an existing assessment."""
    r = r or _get_redis()
    key = f"{ASSESSMENT_PREFIX}{assessment_id}"
    with store.persistence_guard("attach_insights"):
        if not r.exists(key):
            raise NotFoundError("Assessment not found")
        r.hset(key, mapping={
            "insights": insights,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        })


def get_latest_assessment(
    user_id: str,
    r: redis.Redis | None = None,
) -> Optional[Assessment]:
    r = r or _get_redis()
    with store.persistence_guard("get_latest_assessment"):
        return Assessment.latest_for_user(r, user_id)


def assessment_stats(
    user_id: str,
    r: redis.Redis | None = None,
) -> dict:
    """How many assessments the user has taken and what the latest said."""
    r = r or _get_redis()
    with store.persistence_guard("assessment_stats"):
        count = Assessment.count_for_user(r, user_id)
        latest = Assessment.latest_for_user(r, user_id)
    return {
        "count": count,
        "last_assessed_at": latest.created_at if latest else None,
        "archetype": latest.archetype if latest else None,
    }
