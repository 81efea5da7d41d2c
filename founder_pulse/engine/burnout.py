"""Burnout Risk Calculator.

Score formula:
  base       = (100 - mood) * 0.3 + (100 - energy) * 0.3 + stress * 0.4
  assessment = +10 per negative dimension above 70 (risk tolerance never counts)
  trend      = +5 if any trend direction is declining
  score      = round(clamp(base + assessment + trend, 0, 100))

Risk bands on the final score:
  0-40 low | 41-60 caution | 61-80 high | 81-100 critical
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import redis

from founder_pulse.engine import store
from founder_pulse.engine.utils import clamp, round_half_up
from founder_pulse.models.assessment import Assessment, PsychologicalScores
from founder_pulse.models.burnout import BurnoutRecord, BurnoutResult, RiskLevel
from founder_pulse.models.checkin import CheckInEntry, TrendSummary

logger = logging.getLogger(__name__)

MOOD_WEIGHT = 0.3
ENERGY_WEIGHT = 0.3
STRESS_WEIGHT = 0.4

HIGH_DIMENSION_THRESHOLD = 70
ASSESSMENT_MODIFIER = 10
DECLINING_TREND_MODIFIER = 5

LOW_MOOD_THRESHOLD = 40
LOW_ENERGY_THRESHOLD = 40
HIGH_STRESS_THRESHOLD = 70

# Upper bound (inclusive) of each band, checked in order
RISK_BANDS = (
    (40, RiskLevel.LOW),
    (60, RiskLevel.CAUTION),
    (80, RiskLevel.HIGH),
    (100, RiskLevel.CRITICAL),
)

DIMENSION_FACTORS = {
    "imposter_syndrome": "High imposter syndrome",
    "founder_doubt": "High founder doubt",
    "identity_fusion": "High identity fusion with startup",
    "fear_of_rejection": "High fear of rejection",
    "isolation_level": "High isolation level",
}

RISK_GUIDANCE = {
    RiskLevel.LOW: [
        "Keep up your healthy habits and self-care routines",
        "Continue monitoring your mental state with regular check-ins",
        "Consider sharing your positive strategies with other founders",
    ],
    RiskLevel.CAUTION: [
        "Take short breaks throughout your workday",
        "Prioritize sleep and maintain a consistent sleep schedule",
        "Reach out to a trusted friend or mentor to talk",
        "Consider reducing your workload temporarily",
    ],
    RiskLevel.HIGH: [
        "Schedule time off as soon as possible",
        "Delegate tasks to reduce your immediate workload",
        "Speak with a mental health professional",
        "Limit work hours and set firm boundaries",
        "Practice stress-reduction techniques daily",
    ],
    RiskLevel.CRITICAL: [
        "Seek professional mental health support immediately",
        "Take a break from work - your health comes first",
        "Reach out to your support network today",
        "Consider speaking with a therapist or counselor",
        "Do not make major decisions while in this state",
    ],
}

CRISIS_RESOURCES = {
    "hotlines": [
        {"name": "988 Suicide & Crisis Lifeline", "number": "988", "available": "24/7"},
        {"name": "Crisis Text Line", "number": "Text HOME to 741741", "available": "24/7"},
        {"name": "SAMHSA National Helpline", "number": "1-800-662-4357", "available": "24/7"},
    ],
    "message": (
        "If you are in crisis or having thoughts of self-harm, please reach out "
        "to one of these resources immediately. You are not alone."
    ),
}

AssessmentLike = Union[PsychologicalScores, Assessment]


def _scores_of(assessment: Optional[AssessmentLike]) -> Optional[PsychologicalScores]:
    if isinstance(assessment, Assessment):
        return assessment.scores
    return assessment


def _get_redis() -> redis.Redis:
    return store.connect()


def base_score(entry: CheckInEntry) -> float:
    return (
        (100 - entry.mood) * MOOD_WEIGHT
        + (100 - entry.energy) * ENERGY_WEIGHT
        + entry.stress * STRESS_WEIGHT
    )


def assessment_modifier(scores: Optional[PsychologicalScores]) -> int:
    if scores is None:
        return 0
    return ASSESSMENT_MODIFIER * len(scores.high_dimensions(HIGH_DIMENSION_THRESHOLD))


def trend_modifier(trends: Optional[TrendSummary]) -> int:
    if trends is None or not trends.has_declining:
        return 0
    return DECLINING_TREND_MODIFIER


def get_risk_level(score: float) -> str:
    clamped = clamp(score)
    for upper, level in RISK_BANDS:
        if clamped <= upper:
            return level
    return RiskLevel.CRITICAL


def get_contributing_factors(
    entry: CheckInEntry,
    assessment: Optional[AssessmentLike] = None,
) -> list[str]:
    """Human-readable reasons behind the score. Informational only."""
    factors = []
    if entry.mood < LOW_MOOD_THRESHOLD:
        factors.append("Low mood levels")
    if entry.energy < LOW_ENERGY_THRESHOLD:
        factors.append("Low energy levels")
    if entry.stress > HIGH_STRESS_THRESHOLD:
        factors.append("High stress levels")

    scores = _scores_of(assessment)
    if scores is not None:
        factors.extend(DIMENSION_FACTORS[name] for name in scores.high_dimensions(HIGH_DIMENSION_THRESHOLD))
    return factors


def compute_burnout_score(
    entry: CheckInEntry,
    assessment: Optional[AssessmentLike] = None,
    trends: Optional[TrendSummary] = None,
) -> BurnoutResult:
    """Combine one check-in with optional assessment and trends into a risk score."""
    scores = _scores_of(assessment)
    raw = base_score(entry) + assessment_modifier(scores) + trend_modifier(trends)
    score = round_half_up(clamp(raw))
    return BurnoutResult(
        score=score,
        risk_level=get_risk_level(score),
        contributing_factors=tuple(get_contributing_factors(entry, scores)),
    )


def risk_guidance(result: BurnoutResult) -> dict:
    """Guidance for display; crisis resources are attached only when critical."""
    guidance = {"recommendations": list(RISK_GUIDANCE[result.risk_level])}
    if result.risk_level == RiskLevel.CRITICAL:
        guidance["crisis_resources"] = CRISIS_RESOURCES
    return guidance


# ── Persistence ──────────────────────────────────────────────────────────

def save_burnout_score(
    user_id: str,
    result: BurnoutResult,
    entry_id: str = "",
    r: redis.Redis | None = None,
) -> BurnoutRecord:
    r = r or _get_redis()
    record = BurnoutRecord(user_id=user_id, result=result, entry_id=entry_id)
    with store.persistence_guard("save_burnout_score"):
        record.to_redis(r)
    logger.info(
        "Burnout score saved for %s: %d (%s)", user_id, result.score, result.risk_level
    )
    return record


def get_latest_burnout_score(
    user_id: str,
    r: redis.Redis | None = None,
) -> Optional[BurnoutRecord]:
    r = r or _get_redis()
    with store.persistence_guard("get_latest_burnout_score"):
        return BurnoutRecord.latest_from_redis(r, user_id)
