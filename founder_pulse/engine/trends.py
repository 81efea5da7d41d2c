"""Trend Calculator — moving averages and direction per check-in metric.

History arrives most-recent-first. The first floor(n/2) entries form the
"recent" half, the rest the "older" half. A metric moves only when the two
halves differ by at least TREND_THRESHOLD points; stress is inverted, so a
falling stress average counts as improving.
"""

from __future__ import annotations

from typing import Sequence

from founder_pulse.engine.utils import mean, round_half_up
from founder_pulse.models.checkin import CheckInEntry, TrendDirection, TrendSummary

TREND_THRESHOLD = 5


def trend_direction(recent_avg: float, older_avg: float, lower_is_better: bool = False) -> str:
    diff = recent_avg - older_avg
    if abs(diff) < TREND_THRESHOLD:
        return TrendDirection.STABLE
    if lower_is_better:
        return TrendDirection.IMPROVING if diff < 0 else TrendDirection.DECLINING
    return TrendDirection.IMPROVING if diff > 0 else TrendDirection.DECLINING


def compute_trends(history: Sequence[CheckInEntry]) -> TrendSummary:
    """Summarize an ordered (most-recent-first) check-in history."""
    if not history:
        return TrendSummary()

    averages = {
        "mood_avg": round_half_up(mean(e.mood for e in history)),
        "energy_avg": round_half_up(mean(e.energy for e in history)),
        "stress_avg": round_half_up(mean(e.stress for e in history)),
    }
    if len(history) < 2:
        return TrendSummary(**averages)

    midpoint = len(history) // 2
    recent, older = history[:midpoint], history[midpoint:]

    return TrendSummary(
        mood_trend=trend_direction(
            mean(e.mood for e in recent), mean(e.mood for e in older)),
        energy_trend=trend_direction(
            mean(e.energy for e in recent), mean(e.energy for e in older)),
        stress_trend=trend_direction(
            mean(e.stress for e in recent), mean(e.stress for e in older), lower_is_better=True),
        **averages,
    )
