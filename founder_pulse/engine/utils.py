"""Small numeric helpers shared by the scoring modules."""

from __future__ import annotations

import math
from typing import Iterable


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (16.5 → 17, not 16)."""
    return math.floor(value + 0.5)


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def mean(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def safe_percentage(part: int, whole: int) -> int:
    """Rounded ``100 * part / whole``; 0 when ``whole`` is 0."""
    if whole == 0:
        return 0
    return round_half_up(100 * part / whole)
