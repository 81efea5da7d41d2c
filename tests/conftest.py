"""Shared test fixtures for the Founder Pulse test suite."""

import pytest
import fakeredis
from datetime import date

from founder_pulse.models.action import ActionItem, ActionCategory
from founder_pulse.models.assessment import MotivationType, PsychologicalScores
from founder_pulse.models.checkin import CheckInEntry


# ── Redis ────────────────────────────────────────────────────────────────

@pytest.fixture
def r():
    """Fresh fakeredis instance per test (decode_responses=True like production)."""
    return fakeredis.FakeRedis(decode_responses=True)


# ── Dates ────────────────────────────────────────────────────────────────

@pytest.fixture
def today():
    """A fixed 'today' for date-window and streak tests: 2026-02-15."""
    return date(2026, 2, 15)


# ── Factories ────────────────────────────────────────────────────────────

@pytest.fixture
def make_scores():
    """Factory for PsychologicalScores; every numeric dimension defaults to 50.

    Usage:
        scores = make_scores(imposter_syndrome=80, isolation_level=90)
    """
    def _factory(**overrides):
        defaults = {
            "imposter_syndrome": 50,
            "founder_doubt": 50,
            "identity_fusion": 50,
            "fear_of_rejection": 50,
            "risk_tolerance": 50,
            "isolation_level": 50,
            "motivation_type": MotivationType.MIXED,
        }
        defaults.update(overrides)
        return PsychologicalScores(**defaults)

    return _factory


@pytest.fixture
def make_entry(today):
    """Factory for CheckInEntry instances dated ``today`` unless overridden."""
    _counter = 0

    def _factory(**overrides):
        nonlocal _counter
        _counter += 1
        defaults = {
            "entry_id": f"test-entry-{_counter}",
            "user_id": "founder-1",
            "entry_date": today.isoformat(),
            "mood": 50,
            "energy": 50,
            "stress": 50,
        }
        defaults.update(overrides)
        return CheckInEntry(**defaults)

    return _factory


@pytest.fixture
def make_action(today):
    """Factory for ActionItem instances assigned ``today`` unless overridden."""
    _counter = 0

    def _factory(**overrides):
        nonlocal _counter
        _counter += 1
        defaults = {
            "action_id": f"test-action-{_counter}",
            "user_id": "founder-1",
            "text": f"Test action {_counter}",
            "category": ActionCategory.MINDFULNESS,
            "assigned_date": today.isoformat(),
            "position": _counter,
        }
        defaults.update(overrides)
        return ActionItem(**defaults)

    return _factory
