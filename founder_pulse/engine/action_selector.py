"""Action Selector — daily micro-actions per user, stable within a day.

Pipeline:
1. Pool: archetype templates, then templates for every at-risk dimension,
   then the general wellness set. Duplicates across sources are allowed.
2. Quota: 3 by default, 4 at caution, 5 at high or critical risk.
3. Shuffle: Fisher-Yates driven by an LCG seeded from hash(user + date),
   so a (user, date) pair always produces the same order.
4. Pick: one pass taking only unseen categories, then a second pass taking
   any remaining item until the quota is met.
5. Persist: one ActionItem per pick. A failed item is logged and skipped;
   the rest of the batch still commits.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, timezone
from typing import Callable, Optional, Sequence
from uuid import uuid4

import redis

from founder_pulse.engine import store
from founder_pulse.engine.action_templates import (
    GENERAL_WELLNESS_ACTIONS,
    ActionTemplate,
    Dimension,
    actions_for_archetype,
    actions_for_dimension,
)
from founder_pulse.engine.burnout import DIMENSION_FACTORS, HIGH_DIMENSION_THRESHOLD
from founder_pulse.models.action import ActionItem
from founder_pulse.models.assessment import Assessment, PsychologicalScores
from founder_pulse.models.burnout import BurnoutResult, RiskLevel

logger = logging.getLogger(__name__)

MIN_DAILY_ACTIONS = 3
CAUTION_DAILY_ACTIONS = 4
MAX_DAILY_ACTIONS = 5

# LCG parameters (ANSI C rand)
LCG_MULTIPLIER = 1103515245
LCG_INCREMENT = 12345
LCG_MASK = 0x7FFFFFFF

# Contributing-factor text → dimension it points at
FACTOR_DIMENSIONS = {
    "Low mood levels": Dimension.MOOD,
    "Low energy levels": Dimension.ENERGY,
    "High stress levels": Dimension.STRESS,
    **{text: dimension for dimension, text in DIMENSION_FACTORS.items()},
}

# Order in which dimensions inferred from a burnout result join the pool
BURNOUT_DIMENSION_ORDER = (
    Dimension.MOOD,
    Dimension.ENERGY,
    Dimension.STRESS,
    Dimension.IMPOSTER_SYNDROME,
    Dimension.FOUNDER_DOUBT,
    Dimension.ISOLATION_LEVEL,
    Dimension.IDENTITY_FUSION,
    Dimension.FEAR_OF_REJECTION,
)


def _get_redis() -> redis.Redis:
    return store.connect()


# ── Seeded shuffle ───────────────────────────────────────────────────────

def derive_seed(user_id: str, on_date: date | str) -> int:
    """Polynomial (x31) string hash of "<user>-<date>", wrapped to signed 32-bit."""
    text = f"{user_id}-{store.as_iso_date(on_date)}"
    raw = text.encode("utf-16-le")
    h = 0
    for i in range(0, len(raw), 2):
        h = (h * 31 + (raw[i] | (raw[i + 1] << 8))) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


def seeded_random(seed: int) -> Callable[[], float]:
    """LCG yielding floats in [0, 1].

    Uses exact integer arithmetic, so shuffle orders are stable in Python but
    do not match generators that compute the product in double precision.
    """
    state = seed

    def _next() -> float:
        nonlocal state
        state = (state * LCG_MULTIPLIER + LCG_INCREMENT) & LCG_MASK
        return state / LCG_MASK

    return _next


def shuffle_with_seed(items: Sequence, seed: int) -> list:
    """Fisher-Yates over a copy of ``items`` using the seeded LCG."""
    rand = seeded_random(seed)
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        # rand() can return exactly 1.0; keep j inside [0, i]
        j = min(math.floor(rand() * (i + 1)), i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


# ── Candidate pool ───────────────────────────────────────────────────────

def _scores_of(assessment) -> Optional[PsychologicalScores]:
    if isinstance(assessment, Assessment):
        return assessment.scores
    return assessment


def at_risk_dimensions(
    burnout: Optional[BurnoutResult] = None,
    assessment: Optional[PsychologicalScores | Assessment] = None,
) -> list[str]:
    """Dimensions whose templates join the pool, deduplicated, in pool order.

    Assessment dimensions above 70 come first, then whatever the burnout
    result's contributing factors point at.
    """
    dimensions: list[str] = []
    scores = _scores_of(assessment)
    if scores is not None:
        dimensions.extend(scores.high_dimensions(HIGH_DIMENSION_THRESHOLD))

    if burnout is not None:
        flagged = {
            FACTOR_DIMENSIONS[factor]
            for factor in burnout.contributing_factors
            if factor in FACTOR_DIMENSIONS
        }
        dimensions.extend(d for d in BURNOUT_DIMENSION_ORDER if d in flagged)

    return list(dict.fromkeys(dimensions))


def build_candidate_pool(
    archetype: str,
    burnout: Optional[BurnoutResult] = None,
    assessment: Optional[PsychologicalScores | Assessment] = None,
) -> list[ActionTemplate]:
    pool = list(actions_for_archetype(archetype))
    for dimension in at_risk_dimensions(burnout, assessment):
        pool.extend(actions_for_dimension(dimension))
    pool.extend(GENERAL_WELLNESS_ACTIONS)
    return pool


def desired_action_count(burnout: Optional[BurnoutResult] = None) -> int:
    if burnout is None:
        return MIN_DAILY_ACTIONS
    if burnout.risk_level in (RiskLevel.HIGH, RiskLevel.CRITICAL):
        return MAX_DAILY_ACTIONS
    if burnout.risk_level == RiskLevel.CAUTION:
        return CAUTION_DAILY_ACTIONS
    return MIN_DAILY_ACTIONS


def select_diverse_actions(shuffled: Sequence[ActionTemplate], count: int) -> list[ActionTemplate]:
    """Category-diverse pick over an already shuffled pool."""
    chosen: list[int] = []
    used_categories: set[str] = set()

    for i, template in enumerate(shuffled):
        if len(chosen) >= count:
            break
        if template.category not in used_categories:
            chosen.append(i)
            used_categories.add(template.category)

    for i in range(len(shuffled)):
        if len(chosen) >= count:
            break
        if i not in chosen:
            chosen.append(i)

    return [shuffled[i] for i in chosen]


def select_daily_templates(
    user_id: str,
    on_date: date | str,
    archetype: str,
    burnout: Optional[BurnoutResult] = None,
    assessment: Optional[PsychologicalScores | Assessment] = None,
) -> list[ActionTemplate]:
    """Steps 1-4 without persistence. Same inputs, same templates, same order."""
    pool = build_candidate_pool(archetype, burnout, assessment)
    shuffled = shuffle_with_seed(pool, derive_seed(user_id, on_date))
    return select_diverse_actions(shuffled, desired_action_count(burnout))


# ── Persistence ──────────────────────────────────────────────────────────

def generate_daily_actions(
    user_id: str,
    on_date: date | str,
    archetype: str,
    burnout: Optional[BurnoutResult] = None,
    assessment: Optional[PsychologicalScores | Assessment] = None,
    r: redis.Redis | None = None,
) -> list[ActionItem]:
    """Select and store a new batch for (user, date).

    Callers must check for an existing batch first (see ensure_daily_actions).
    """
    r = r or _get_redis()
    assigned = store.as_iso_date(on_date)
    templates = select_daily_templates(user_id, assigned, archetype, burnout, assessment)
    batch_created_at = datetime.now(timezone.utc).isoformat()

    created: list[ActionItem] = []
    for position, template in enumerate(templates):
        action = ActionItem(
            action_id=f"action-{uuid4().hex[:12]}",
            user_id=user_id,
            text=template.text,
            category=template.category,
            target_dimension=template.target_dimension,
            assigned_date=assigned,
            position=position,
            created_at=batch_created_at,
        )
        try:
            action.to_redis(r)
        except redis.RedisError as exc:
            logger.warning(
                "Skipping action for %s on %s (%r): %s",
                user_id, assigned, template.text, exc,
            )
            continue
        created.append(action)

    logger.info(
        "Generated %d/%d actions for %s on %s (%s)",
        len(created), len(templates), user_id, assigned, archetype,
    )
    return created


def get_actions_for_date(
    user_id: str,
    on_date: date | str,
    r: redis.Redis | None = None,
) -> list[ActionItem]:
    r = r or _get_redis()
    with store.persistence_guard("get_actions_for_date"):
        return ActionItem.for_day(r, user_id, store.as_iso_date(on_date))


def has_actions_for_date(
    user_id: str,
    on_date: date | str,
    r: redis.Redis | None = None,
) -> bool:
    return len(get_actions_for_date(user_id, on_date, r)) > 0


def clear_actions_for_date(
    user_id: str,
    on_date: date | str,
    r: redis.Redis | None = None,
) -> int:
    """Delete a user's batch for one date. Returns the number removed."""
    r = r or _get_redis()
    assigned = store.as_iso_date(on_date)
    with store.persistence_guard("clear_actions_for_date"):
        removed = ActionItem.delete_day(r, user_id, assigned)
    logger.info("Cleared %d actions for %s on %s", removed, user_id, assigned)
    return removed


def ensure_daily_actions(
    user_id: str,
    on_date: date | str,
    archetype: str,
    burnout: Optional[BurnoutResult] = None,
    assessment: Optional[PsychologicalScores | Assessment] = None,
    force: bool = False,
    r: redis.Redis | None = None,
) -> tuple[list[ActionItem], bool]:
    """Return the day's batch, generating it only if needed.

    With ``force`` an existing batch is deleted and regenerated.
    Returns (actions, generated).
    """
    r = r or _get_redis()
    existing = get_actions_for_date(user_id, on_date, r)
    if existing and not force:
        return existing, False
    if existing:
        clear_actions_for_date(user_id, on_date, r)
    return generate_daily_actions(user_id, on_date, archetype, burnout, assessment, r), True
