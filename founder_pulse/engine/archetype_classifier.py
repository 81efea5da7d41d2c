"""Archetype Classifier — ordered rule chain over the seven dimensions.

Rules are evaluated top to bottom and the first match wins, so a profile
that satisfies several rules always gets the highest-priority one. The last
rule always matches, which makes classification total.
"""

from __future__ import annotations

from typing import Callable

from founder_pulse.models.archetype import ARCHETYPES, ArchetypeName, ArchetypeResult
from founder_pulse.models.assessment import PsychologicalScores

HIGH_DIMENSION_THRESHOLD = 70
BURNOUT_MIN_HIGH_DIMENSIONS = 3
BALANCED_RANGE = (40, 60)

# Dimension-specific advice, in the order it is offered
DIMENSION_RECOMMENDATIONS = (
    ("imposter_syndrome",
     "Document your wins daily - imposter syndrome fades when you see evidence of your competence."),
    ("founder_doubt",
     "Find a mentor who has been through the founder journey - their perspective will help ground your doubts."),
    ("isolation_level",
     "Join a founder community this week - isolation amplifies every other challenge."),
    ("identity_fusion",
     "Schedule non-startup activities weekly - your identity needs to be broader than your company."),
    ("fear_of_rejection",
     'Reframe rejection as data - every "no" teaches you something about your market.'),
)
MAX_RECOMMENDATIONS = 3

Rule = tuple[str, Callable[[PsychologicalScores], bool]]


def _burning_out(s: PsychologicalScores) -> bool:
    return len(s.high_dimensions(HIGH_DIMENSION_THRESHOLD)) >= BURNOUT_MIN_HIGH_DIMENSIONS


def _balanced(s: PsychologicalScores) -> bool:
    low, high = BALANCED_RANGE
    return all(low <= value <= high for value in s.numeric().values())


RULES: tuple[Rule, ...] = (
    (ArchetypeName.BURNING_OUT, _burning_out),
    (ArchetypeName.PERFECTIONIST_BUILDER,
     lambda s: s.imposter_syndrome > 60 and s.founder_doubt > 60 and s.risk_tolerance < 50),
    (ArchetypeName.OPPORTUNISTIC_VISIONARY,
     lambda s: s.risk_tolerance > 70 and s.founder_doubt < 40 and s.imposter_syndrome < 40),
    (ArchetypeName.ISOLATED_DREAMER,
     lambda s: s.isolation_level > 70 and (s.identity_fusion > 50 or s.founder_doubt > 50)),
    (ArchetypeName.SELF_ASSURED_HUSTLER,
     lambda s: s.imposter_syndrome < 40 and s.founder_doubt < 40 and s.risk_tolerance > 60),
    (ArchetypeName.COMMUNITY_DRIVEN,
     lambda s: s.isolation_level < 40 and (s.imposter_syndrome < 50 or s.founder_doubt < 50)),
    (ArchetypeName.BALANCED_FOUNDER, _balanced),
    (ArchetypeName.GROWTH_SEEKER, lambda s: True),
)


def classify_archetype(scores: PsychologicalScores) -> ArchetypeResult:
    """Return the archetype of the first rule that matches ``scores``."""
    for name, predicate in RULES:
        if predicate(scores):
            return ARCHETYPES[name]
    # Unreachable: the last rule always matches
    return ARCHETYPES[ArchetypeName.GROWTH_SEEKER]


def get_recommendations(scores: PsychologicalScores, archetype: str) -> list[str]:
    """Advice for each high dimension, then the archetype's own, capped at 3."""
    recommendations = [
        text for name, text in DIMENSION_RECOMMENDATIONS
        if getattr(scores, name) > HIGH_DIMENSION_THRESHOLD
    ]
    recommendations.append(ARCHETYPES[archetype].recommendation)
    return recommendations[:MAX_RECOMMENDATIONS]
