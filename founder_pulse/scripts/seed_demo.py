"""Seed Redis with two weeks of history for a demo founder.

Run: python -m founder_pulse.scripts.seed_demo
"""

import logging
from datetime import timedelta

import redis

from founder_pulse.engine import store
from founder_pulse.engine.action_selector import ensure_daily_actions
from founder_pulse.engine.assessments import submit_assessment
from founder_pulse.engine.journal import check_in_and_score
from founder_pulse.engine.streaks import complete_action, compute_completion_stats
from founder_pulse.engine.user_data import delete_all_user_data

logger = logging.getLogger(__name__)

DEMO_USER = "demo-founder"
DEMO_DAYS = 14

# Isolated, doubtful, tied up in the company; leans towards Isolated Dreamer
DEMO_ANSWERS = (
    ["C", "B", "C", "B", "B"]       # imposter syndrome
    + ["C", "C", "B", "C"]          # founder doubt
    + ["D", "C", "D", "C"]          # identity fusion
    + ["B", "C", "B", "B", "C"]     # fear of rejection
    + ["C", "B", "C"]               # risk tolerance
    + ["D", "B", "A"]               # motivation
    + ["D"]                         # isolation
)


def seed(r: redis.Redis | None = None, user_id: str = DEMO_USER) -> dict:
    r = r or store.connect()
    delete_all_user_data(user_id, r)
    today = store.utc_today()

    outcome = submit_assessment(user_id, DEMO_ANSWERS, r)
    logger.info("Assessment: %s", outcome.archetype.name)

    # Mood and energy slide over the fortnight while stress climbs
    for offset in range(DEMO_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        drift = DEMO_DAYS - 1 - offset
        _, result = check_in_and_score(
            user_id,
            mood=max(20, 75 - drift * 3),
            energy=max(20, 70 - drift * 3),
            stress=min(95, 35 + drift * 4),
            notes="Demo check-in",
            entry_date=day,
            r=r,
        )

        actions, _ = ensure_daily_actions(
            user_id, day, outcome.archetype.name, result, outcome.scores, r=r,
        )
        # Every third day nothing gets done; today stays open
        if offset and offset % 3:
            complete_action(actions[0].action_id, user_id, r)

    stats = compute_completion_stats(user_id, today=today, r=r)
    logger.info(
        "Seeded %d days for %s: %d/%d actions completed, streak %d",
        DEMO_DAYS, user_id, stats.completed_actions, stats.total_actions, stats.streak_days,
    )
    return {"archetype": outcome.archetype.name, "stats": stats.to_dict()}


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed()
