"""Tests for the trend calculator (pure functions — no Redis needed)."""

from founder_pulse.engine.trends import TREND_THRESHOLD, compute_trends, trend_direction
from founder_pulse.models.checkin import TrendDirection, TrendSummary


class TestTrendDirection:
    def test_small_difference_is_stable(self):
        assert trend_direction(54, 50) == TrendDirection.STABLE

    def test_threshold_difference_moves(self):
        assert trend_direction(50 + TREND_THRESHOLD, 50) == TrendDirection.IMPROVING

    def test_drop_is_declining(self):
        assert trend_direction(40, 50) == TrendDirection.DECLINING

    def test_lower_is_better_inverts(self):
        assert trend_direction(40, 50, lower_is_better=True) == TrendDirection.IMPROVING
        assert trend_direction(60, 50, lower_is_better=True) == TrendDirection.DECLINING


class TestComputeTrends:
    def test_empty_history(self):
        assert compute_trends([]) == TrendSummary()

    def test_single_entry_is_stable_with_averages(self, make_entry):
        summary = compute_trends([make_entry(mood=80, energy=20, stress=90)])
        assert (summary.mood_avg, summary.energy_avg, summary.stress_avg) == (80, 20, 90)
        assert summary.mood_trend == TrendDirection.STABLE
        assert summary.energy_trend == TrendDirection.STABLE
        assert summary.stress_trend == TrendDirection.STABLE

    def test_averages_round_half_up(self, make_entry):
        summary = compute_trends([make_entry(mood=50), make_entry(mood=51)])
        assert summary.mood_avg == 51

    def test_stress_falling_is_improving(self, make_entry):
        """Most-recent-first: recent stress 40 vs older 60."""
        history = [make_entry(stress=40), make_entry(stress=60)]
        assert compute_trends(history).stress_trend == TrendDirection.IMPROVING

    def test_mood_falling_is_declining(self, make_entry):
        history = [make_entry(mood=30), make_entry(mood=70)]
        summary = compute_trends(history)
        assert summary.mood_trend == TrendDirection.DECLINING
        assert summary.has_declining is True

    def test_odd_length_puts_extra_entry_in_older_half(self, make_entry):
        """n=3: recent = [0], older = [1, 2]."""
        history = [make_entry(energy=60), make_entry(energy=50), make_entry(energy=60)]
        # 60 vs 55 → exactly the threshold
        assert compute_trends(history).energy_trend == TrendDirection.IMPROVING

    def test_no_change_has_no_decline(self, make_entry):
        history = [make_entry(), make_entry(), make_entry()]
        assert compute_trends(history).has_declining is False
