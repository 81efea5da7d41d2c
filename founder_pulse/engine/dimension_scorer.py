"""Dimension Scorer — 25 questionnaire answers to 7 psychological dimensions.

Answers are given as letters ("A".."D") or ordinal levels (1..4). Each level
carries a fixed weight (A/1 → 0, B/2 → 33, C/3 → 67, D/4 → 100). Numeric
dimensions are the rounded mean weight of a fixed, contiguous question range:

    Q1-5   imposter_syndrome
    Q6-9   founder_doubt
    Q10-13 identity_fusion
    Q14-18 fear_of_rejection
    Q19-21 risk_tolerance
    Q22-24 motivation_type (comparison, not a mean)
    Q25    isolation_level
"""

from __future__ import annotations

from typing import Sequence

from founder_pulse.engine.utils import round_half_up
from founder_pulse.errors import ValidationError
from founder_pulse.models.assessment import MotivationType, PsychologicalScores

ANSWER_COUNT = 25

LEVEL_WEIGHTS: dict[int, int] = {1: 0, 2: 33, 3: 67, 4: 100}
LETTER_LEVELS: dict[str, int] = {"A": 1, "B": 2, "C": 3, "D": 4}

# Inclusive, 0-indexed question ranges per numeric dimension
DIMENSION_RANGES: dict[str, tuple[int, int]] = {
    "imposter_syndrome": (0, 4),
    "founder_doubt": (5, 8),
    "identity_fusion": (9, 12),
    "fear_of_rejection": (13, 17),
    "risk_tolerance": (18, 20),
    "isolation_level": (24, 24),
}

PASSION_INDEX = 21
FINANCIAL_INDEX = 22
RECOGNITION_INDEX = 23

_AGREEMENT = {"A": "Strongly Disagree", "B": "Disagree", "C": "Agree", "D": "Strongly Agree"}

QUIZ_QUESTIONS: tuple[dict, ...] = tuple(
    {"id": i + 1, "dimension": dimension, "text": text, "options": dict(_AGREEMENT)}
    for i, (dimension, text) in enumerate([
        ("Imposter Syndrome", "I feel like a fraud despite my achievements and abilities"),
        ("Imposter Syndrome", "I'm afraid people will discover I'm not as competent as they think"),
        ("Imposter Syndrome", "When I succeed, it feels more like luck than my own doing"),
        ("Imposter Syndrome", "I often feel like I don't deserve my position as a founder"),
        ("Imposter Syndrome", "I'm afraid my startup idea isn't original or good enough"),
        ("Founder Doubt", "I doubt whether my startup will actually succeed"),
        ("Founder Doubt", "I question my ability to lead my company effectively"),
        ("Founder Doubt", "I worry that I don't have what it takes to be an entrepreneur"),
        ("Founder Doubt", "I'm unsure if I made the right decision to start this company"),
        ("Identity Fusion", "My self-worth is deeply tied to my startup's success"),
        ("Identity Fusion", "I define myself primarily as a founder"),
        ("Identity Fusion", "When my business struggles, it feels like a personal failure"),
        ("Identity Fusion", "I struggle to separate my identity from my role as founder"),
        ("Fear of Rejection", "I'm afraid the market will reject my product/service"),
        ("Fear of Rejection", "I worry about what others think of my startup idea"),
        ("Fear of Rejection", "I fear negative feedback on my business"),
        ("Fear of Rejection", "I'm concerned peers or competitors will judge my startup negatively"),
        ("Fear of Rejection", "I worry investors won't believe in my vision"),
        ("Risk Tolerance", "I'm comfortable making bold decisions with uncertain outcomes"),
        ("Risk Tolerance", "I embrace uncertainty as a necessary part of entrepreneurship"),
        ("Risk Tolerance", "I'm willing to take calculated risks for potentially big rewards"),
        ("Motivation Type", "I'm driven primarily by my passion for solving this problem"),
        ("Motivation Type", "I'm motivated by the potential financial rewards"),
        ("Motivation Type", "I'm driven by external validation and recognition"),
        ("Isolation", "I feel isolated or lonely as a founder"),
    ])
)


def _to_level(answer: object, position: int) -> int:
    """Map one answer to its level 1-4, or raise naming the 1-indexed position."""
    if isinstance(answer, str) and answer in LETTER_LEVELS:
        return LETTER_LEVELS[answer]
    # bool is an int subclass; True must not pass as level 1
    if isinstance(answer, int) and not isinstance(answer, bool) and answer in LEVEL_WEIGHTS:
        return answer
    raise ValidationError(
        f"Invalid answer at position {position}: must be A, B, C, or D (or 1-4)"
    )


def validate_answers(answers: Sequence) -> list[int]:
    """Check shape and values; return the answers as levels 1-4."""
    if isinstance(answers, (str, bytes)) or not isinstance(answers, Sequence):
        raise ValidationError("Answers must be a list")
    if len(answers) != ANSWER_COUNT:
        raise ValidationError(
            f"Exactly {ANSWER_COUNT} answers required (got {len(answers)})"
        )
    return [_to_level(answer, i + 1) for i, answer in enumerate(answers)]


def _dimension_score(weights: list[int], start: int, end: int) -> int:
    chunk = weights[start:end + 1]
    return round_half_up(sum(chunk) / len(chunk))


def _motivation_type(weights: list[int]) -> str:
    passion = weights[PASSION_INDEX]
    extrinsic_avg = (weights[FINANCIAL_INDEX] + weights[RECOGNITION_INDEX]) / 2
    if passion > extrinsic_avg:
        return MotivationType.INTRINSIC
    if extrinsic_avg > passion:
        return MotivationType.EXTRINSIC
    return MotivationType.MIXED


def score_answers(answers: Sequence) -> PsychologicalScores:
    """Derive the seven dimension scores from exactly 25 answers.

    Raises:
        ValidationError: wrong count or an answer outside the four levels.
    """
    levels = validate_answers(answers)
    weights = [LEVEL_WEIGHTS[level] for level in levels]

    numeric = {
        name: _dimension_score(weights, start, end)
        for name, (start, end) in DIMENSION_RANGES.items()
    }
    return PsychologicalScores(motivation_type=_motivation_type(weights), **numeric)
