"""Tests for the check-in journal: validation, upsert, history and scoring pipeline."""

import pytest
from datetime import timedelta
from unittest.mock import MagicMock

import redis

from founder_pulse.engine.burnout import get_latest_burnout_score
from founder_pulse.engine.journal import (
    check_in_and_score,
    delete_entry,
    get_entry_by_date,
    get_history,
    record_check_in,
    validate_check_in,
)
from founder_pulse.errors import NotFoundError, PersistenceFailure, ValidationError
from founder_pulse.models.assessment import Assessment
from founder_pulse.models.burnout import RiskLevel
from founder_pulse.models.checkin import CHECKIN_PREFIX


# ═══════════════════════════════════════════════════════════════════════════
# Validation (pure)
# ═══════════════════════════════════════════════════════════════════════════


class TestValidateCheckIn:
    def test_valid_input(self):
        validate_check_in("founder-1", 0, 50.5, 100, "ok")

    def test_missing_user(self):
        with pytest.raises(ValidationError, match="userId is required"):
            validate_check_in("", 50, 50, 50)

    @pytest.mark.parametrize("field,args", [
        ("mood", ("x", 50, 50)),
        ("energy", (50, None, 50)),
        ("stress", (50, 50, float("nan"))),
    ])
    def test_non_numeric_metric_named(self, field, args):
        with pytest.raises(ValidationError, match=f"{field} must be a number"):
            validate_check_in("founder-1", *args)

    def test_bool_is_not_a_number(self):
        with pytest.raises(ValidationError, match="mood must be a number"):
            validate_check_in("founder-1", True, 50, 50)

    @pytest.mark.parametrize("value", [-1, 101, 100.5])
    def test_out_of_range(self, value):
        with pytest.raises(ValidationError, match="energy must be between 0 and 100"):
            validate_check_in("founder-1", 50, value, 50)

    def test_notes_type(self):
        with pytest.raises(ValidationError, match="notes must be a string"):
            validate_check_in("founder-1", 50, 50, 50, 42)

    def test_notes_length(self):
        validate_check_in("founder-1", 50, 50, 50, "x" * 500)
        with pytest.raises(ValidationError, match="must not exceed 500 characters"):
            validate_check_in("founder-1", 50, 50, 50, "x" * 501)


# ═══════════════════════════════════════════════════════════════════════════
# Entries
# ═══════════════════════════════════════════════════════════════════════════


class TestRecordCheckIn:
    def test_creates_entry(self, r, today):
        entry = record_check_in("founder-1", 60, 40, 30, "fine", today, r)
        stored = get_entry_by_date("founder-1", today, r)
        assert stored == entry
        assert stored.notes == "fine"

    def test_same_day_overwrites(self, r, today):
        first = record_check_in("founder-1", 60, 40, 30, None, today, r)
        second = record_check_in("founder-1", 20, 20, 90, "rough", today, r)

        assert second.entry_id == first.entry_id
        assert second.created_at == first.created_at
        assert second.updated_at >= first.updated_at
        assert get_entry_by_date("founder-1", today, r).mood == 20
        assert len(r.keys(f"{CHECKIN_PREFIX}founder-1:*")) == 1

    def test_different_days_are_separate(self, r, today):
        a = record_check_in("founder-1", 60, 40, 30, None, today - timedelta(days=1), r)
        b = record_check_in("founder-1", 60, 40, 30, None, today, r)
        assert a.entry_id != b.entry_id

    def test_fractional_metrics_rounded(self, r, today):
        entry = record_check_in("founder-1", 50.5, 49.4, 10, None, today, r)
        assert (entry.mood, entry.energy) == (51, 49)

    def test_invalid_input_writes_nothing(self, r, today):
        with pytest.raises(ValidationError):
            record_check_in("founder-1", 150, 50, 50, None, today, r)
        assert get_entry_by_date("founder-1", today, r) is None

    def test_store_failure_propagates(self, today):
        broken = MagicMock()
        broken.hgetall.side_effect = redis.ConnectionError("refused")
        with pytest.raises(PersistenceFailure):
            record_check_in("founder-1", 50, 50, 50, None, today, broken)


class TestHistory:
    def test_most_recent_first_within_window(self, r, today):
        for offset in (0, 2, 7, 8):
            record_check_in("founder-1", 50 + offset, 50, 50, None, today - timedelta(days=offset), r)

        history = get_history("founder-1", 7, today, r)
        assert [e.entry_date for e in history] == [
            today.isoformat(),
            (today - timedelta(days=2)).isoformat(),
            (today - timedelta(days=7)).isoformat(),
        ]

    def test_empty(self, r, today):
        assert get_history("founder-1", 7, today, r) == []

    def test_window_ends_at_anchor_date(self, r, today):
        anchor = today - timedelta(days=3)
        record_check_in("founder-1", 90, 90, 10, None, today, r)
        record_check_in("founder-1", 50, 50, 50, None, anchor - timedelta(days=1), r)

        history = get_history("founder-1", 7, anchor, r)
        assert [e.entry_date for e in history] == [(anchor - timedelta(days=1)).isoformat()]

    @pytest.mark.parametrize("days", [0, -3, True, "7"])
    def test_days_must_be_positive_int(self, r, today, days):
        with pytest.raises(ValidationError, match="days must be a positive number"):
            get_history("founder-1", days, today, r)


class TestDeleteEntry:
    def test_deletes_own_entry(self, r, today):
        entry = record_check_in("founder-1", 50, 50, 50, None, today, r)
        delete_entry(entry.entry_id, "founder-1", r)

        assert get_entry_by_date("founder-1", today, r) is None
        assert get_history("founder-1", 7, today, r) == []

    def test_unknown_entry(self, r):
        with pytest.raises(NotFoundError):
            delete_entry("entry-missing", "founder-1", r)

    def test_other_users_entry(self, r, today):
        entry = record_check_in("founder-1", 50, 50, 50, None, today, r)
        with pytest.raises(NotFoundError):
            delete_entry(entry.entry_id, "founder-2", r)
        assert get_entry_by_date("founder-1", today, r) is not None


# ═══════════════════════════════════════════════════════════════════════════
# Check-in → burnout pipeline
# ═══════════════════════════════════════════════════════════════════════════


class TestCheckInAndScore:
    def test_scores_and_saves(self, r, today):
        entry, result = check_in_and_score("founder-1", 50, 50, 50, entry_date=today, r=r)

        assert result.score == 50
        assert result.risk_level == RiskLevel.CAUTION
        saved = get_latest_burnout_score("founder-1", r)
        assert saved.result == result
        assert saved.entry_id == entry.entry_id

    def test_uses_latest_assessment(self, r, today, make_scores):
        Assessment(
            assessment_id="a-1", user_id="founder-1", answers=[],
            scores=make_scores(imposter_syndrome=90), archetype="Growth Seeker",
        ).to_redis(r)

        _, result = check_in_and_score("founder-1", 50, 50, 50, entry_date=today, r=r)
        assert result.score == 60
        assert "High imposter syndrome" in result.contributing_factors

    def test_declining_history_adds_trend_modifier(self, r, today):
        record_check_in("founder-1", 90, 50, 50, None, today - timedelta(days=1), r)
        _, result = check_in_and_score("founder-1", 50, 50, 50, entry_date=today, r=r)
        # base 50 + 5 for the mood drop
        assert result.score == 55

    def test_backfilled_day_ignores_later_entries(self, r, today):
        record_check_in("founder-1", 10, 50, 50, None, today, r)
        _, result = check_in_and_score(
            "founder-1", 50, 50, 50, entry_date=today - timedelta(days=3), r=r
        )
        # today's lower mood is not part of the backfilled day's trend
        assert result.score == 50

    def test_malformed_date_is_validation_error(self, r):
        with pytest.raises(ValidationError, match="Invalid date"):
            check_in_and_score("founder-1", 50, 50, 50, entry_date="2026-02-30", r=r)
        assert r.dbsize() == 0
