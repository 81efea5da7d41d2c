"""Tests for daily action selection: seeded shuffle, diversity pick, batch persistence."""

import pytest
import redis
from datetime import timedelta
from unittest.mock import patch

from founder_pulse.engine.action_selector import (
    CAUTION_DAILY_ACTIONS,
    MAX_DAILY_ACTIONS,
    MIN_DAILY_ACTIONS,
    at_risk_dimensions,
    build_candidate_pool,
    clear_actions_for_date,
    derive_seed,
    desired_action_count,
    ensure_daily_actions,
    generate_daily_actions,
    get_actions_for_date,
    has_actions_for_date,
    select_daily_templates,
    select_diverse_actions,
    seeded_random,
    shuffle_with_seed,
)
from founder_pulse.engine.action_templates import (
    ARCHETYPE_ACTIONS,
    DIMENSION_ACTIONS,
    GENERAL_WELLNESS_ACTIONS,
    ActionTemplate,
    Dimension,
    all_action_templates,
)
from founder_pulse.errors import ValidationError
from founder_pulse.models.action import ActionCategory, ActionItem
from founder_pulse.models.archetype import ArchetypeName
from founder_pulse.models.burnout import BurnoutResult, RiskLevel


def _burnout(level=RiskLevel.LOW, factors=()):
    return BurnoutResult(score=50, risk_level=level, contributing_factors=tuple(factors))


# ═══════════════════════════════════════════════════════════════════════════
# Seeded shuffle (pure)
# ═══════════════════════════════════════════════════════════════════════════


class TestSeededShuffle:
    def test_seed_is_stable(self, today):
        assert derive_seed("founder-1", today) == derive_seed("founder-1", today.isoformat())

    def test_seed_fits_signed_32_bit(self, today):
        for user in ("founder-1", "a" * 200, "ünïcødé-👋"):
            seed = derive_seed(user, today)
            assert -(2 ** 31) <= seed < 2 ** 31

    def test_seed_differs_by_user_and_date(self, today):
        base = derive_seed("founder-1", today)
        assert derive_seed("founder-2", today) != base
        assert derive_seed("founder-1", today + timedelta(days=1)) != base

    def test_generator_first_value(self):
        rand = seeded_random(0)
        assert rand() == 12345 / 0x7FFFFFFF

    def test_generator_uses_exact_products(self):
        # (2**31 - 1) * 1103515245 exceeds 2**53; the low 31 bits must survive
        rand = seeded_random(0x7FFFFFFF)
        assert rand() == 1043980748 / 0x7FFFFFFF

    def test_generator_is_repeatable_and_bounded(self):
        a, b = seeded_random(42), seeded_random(42)
        values = [a() for _ in range(100)]
        assert values == [b() for _ in range(100)]
        assert all(0 <= v <= 1 for v in values)

    def test_negative_seed_supported(self):
        values = [seeded_random(-123456)() for _ in range(3)]
        assert all(0 <= v <= 1 for v in values)

    def test_shuffle_is_permutation(self):
        items = list(range(20))
        shuffled = shuffle_with_seed(items, 7)
        assert sorted(shuffled) == items
        assert items == list(range(20))

    def test_shuffle_is_deterministic(self):
        items = list("abcdefghij")
        assert shuffle_with_seed(items, 99) == shuffle_with_seed(items, 99)

    def test_shuffle_depends_on_seed(self):
        items = list(range(30))
        orders = {tuple(shuffle_with_seed(items, seed)) for seed in range(10)}
        assert len(orders) > 1

    def test_shuffle_trivial_inputs(self):
        assert shuffle_with_seed([], 1) == []
        assert shuffle_with_seed(["only"], 1) == ["only"]


# ═══════════════════════════════════════════════════════════════════════════
# Pool, quota and diversity pick (pure)
# ═══════════════════════════════════════════════════════════════════════════


class TestQuota:
    def test_no_risk_result(self):
        assert desired_action_count(None) == MIN_DAILY_ACTIONS == 3

    @pytest.mark.parametrize("level,count", [
        (RiskLevel.LOW, 3),
        (RiskLevel.CAUTION, CAUTION_DAILY_ACTIONS),
        (RiskLevel.HIGH, MAX_DAILY_ACTIONS),
        (RiskLevel.CRITICAL, MAX_DAILY_ACTIONS),
    ])
    def test_by_risk_level(self, level, count):
        assert desired_action_count(_burnout(level)) == count


class TestAtRiskDimensions:
    def test_nothing_flagged(self, make_scores):
        assert at_risk_dimensions(None, make_scores()) == []

    def test_assessment_dimensions_in_fixed_order(self, make_scores):
        scores = make_scores(isolation_level=90, imposter_syndrome=75)
        assert at_risk_dimensions(None, scores) == [
            Dimension.IMPOSTER_SYNDROME, Dimension.ISOLATION_LEVEL,
        ]

    def test_checkin_factors_map_to_dimensions(self):
        burnout = _burnout(factors=["High stress levels", "Low mood levels"])
        assert at_risk_dimensions(burnout) == [Dimension.MOOD, Dimension.STRESS]

    def test_assessment_first_then_burnout_deduplicated(self, make_scores):
        burnout = _burnout(factors=["Low energy levels", "High isolation level"])
        dims = at_risk_dimensions(burnout, make_scores(isolation_level=80))
        assert dims == [Dimension.ISOLATION_LEVEL, Dimension.ENERGY]

    def test_unknown_factor_ignored(self):
        assert at_risk_dimensions(_burnout(factors=["Something else"])) == []


class TestCandidatePool:
    def test_archetype_then_general(self):
        pool = build_candidate_pool(ArchetypeName.BALANCED_FOUNDER)
        expected = list(ARCHETYPE_ACTIONS[ArchetypeName.BALANCED_FOUNDER]) + list(GENERAL_WELLNESS_ACTIONS)
        assert pool == expected

    def test_at_risk_dimensions_appended_before_general(self, make_scores):
        pool = build_candidate_pool(
            ArchetypeName.GROWTH_SEEKER, assessment=make_scores(fear_of_rejection=90)
        )
        archetype = list(ARCHETYPE_ACTIONS[ArchetypeName.GROWTH_SEEKER])
        dimension = list(DIMENSION_ACTIONS[Dimension.FEAR_OF_REJECTION])
        assert pool == archetype + dimension + list(GENERAL_WELLNESS_ACTIONS)

    def test_unknown_archetype_still_has_filler(self):
        assert build_candidate_pool("Unknown") == list(GENERAL_WELLNESS_ACTIONS)

    def test_catalog_covers_every_archetype(self):
        assert set(ARCHETYPE_ACTIONS) == set(ArchetypeName.ALL)
        assert all(t.category in ActionCategory.ALL for t in all_action_templates())


class TestSelectDiverseActions:
    def test_distinct_categories_first(self):
        pool = [
            ActionTemplate("a", ActionCategory.REST, "mood"),
            ActionTemplate("b", ActionCategory.REST, "mood"),
            ActionTemplate("c", ActionCategory.SOCIAL, "mood"),
            ActionTemplate("d", ActionCategory.PHYSICAL, "mood"),
        ]
        assert [t.text for t in select_diverse_actions(pool, 3)] == ["a", "c", "d"]

    def test_second_pass_fills_quota(self):
        pool = [
            ActionTemplate("a", ActionCategory.REST, "mood"),
            ActionTemplate("b", ActionCategory.REST, "mood"),
            ActionTemplate("c", ActionCategory.SOCIAL, "mood"),
        ]
        assert [t.text for t in select_diverse_actions(pool, 3)] == ["a", "c", "b"]

    def test_duplicate_templates_can_both_be_chosen(self):
        same = ActionTemplate("a", ActionCategory.REST, "mood")
        assert select_diverse_actions([same, same], 2) == [same, same]

    def test_pool_smaller_than_quota(self):
        pool = [ActionTemplate("a", ActionCategory.REST, "mood")]
        assert len(select_diverse_actions(pool, 5)) == 1

    def test_empty_pool(self):
        assert select_diverse_actions([], 3) == []


class TestSelectDailyTemplates:
    def test_same_inputs_same_selection(self, today, make_scores):
        args = ("founder-1", today, ArchetypeName.ISOLATED_DREAMER,
                _burnout(RiskLevel.HIGH), make_scores(isolation_level=90))
        assert select_daily_templates(*args) == select_daily_templates(*args)

    def test_selection_varies_across_dates(self, today):
        selections = {
            tuple(select_daily_templates("founder-1", today + timedelta(days=i),
                                         ArchetypeName.BALANCED_FOUNDER))
            for i in range(10)
        }
        assert len(selections) > 1

    @pytest.mark.parametrize("level,count", [
        (RiskLevel.LOW, 3), (RiskLevel.CAUTION, 4), (RiskLevel.CRITICAL, 5),
    ])
    def test_quota_and_full_category_spread(self, today, level, count):
        """Balanced Founder's pool spans all five categories, so every pick is distinct."""
        picks = select_daily_templates("founder-1", today, ArchetypeName.BALANCED_FOUNDER, _burnout(level))
        assert len(picks) == count
        assert len({t.category for t in picks}) == count


# ═══════════════════════════════════════════════════════════════════════════
# Persistence
# ═══════════════════════════════════════════════════════════════════════════


class TestGenerateDailyActions:
    def test_persists_batch_in_selection_order(self, r, today):
        actions = generate_daily_actions("founder-1", today, ArchetypeName.BALANCED_FOUNDER, r=r)
        expected = select_daily_templates("founder-1", today, ArchetypeName.BALANCED_FOUNDER)

        assert [a.text for a in actions] == [t.text for t in expected]
        stored = get_actions_for_date("founder-1", today, r)
        assert [a.action_id for a in stored] == [a.action_id for a in actions]
        assert all(not a.completed for a in stored)
        assert all(a.assigned_date == today.isoformat() for a in stored)

    def test_item_failure_is_skipped(self, r, today):
        with patch.object(
            ActionItem, "to_redis", side_effect=[None, redis.ConnectionError("down"), None]
        ):
            actions = generate_daily_actions("founder-1", today, ArchetypeName.GROWTH_SEEKER, r=r)
        assert len(actions) == 2
        assert [a.position for a in actions] == [0, 2]

    def test_has_and_clear(self, r, today):
        assert has_actions_for_date("founder-1", today, r) is False
        generate_daily_actions("founder-1", today, ArchetypeName.GROWTH_SEEKER, r=r)
        assert has_actions_for_date("founder-1", today, r) is True

        assert clear_actions_for_date("founder-1", today, r) == 3
        assert has_actions_for_date("founder-1", today, r) is False
        assert clear_actions_for_date("founder-1", today, r) == 0

    def test_clear_leaves_other_days(self, r, today):
        yesterday = today - timedelta(days=1)
        generate_daily_actions("founder-1", yesterday, ArchetypeName.GROWTH_SEEKER, r=r)
        generate_daily_actions("founder-1", today, ArchetypeName.GROWTH_SEEKER, r=r)
        clear_actions_for_date("founder-1", today, r)
        assert len(get_actions_for_date("founder-1", yesterday, r)) == 3

    @pytest.mark.parametrize("bad", ["2026-13-45", "yesterday", ""])
    def test_malformed_date_is_validation_error(self, r, bad):
        with pytest.raises(ValidationError, match="Invalid date"):
            generate_daily_actions("founder-1", bad, ArchetypeName.GROWTH_SEEKER, r=r)
        assert r.dbsize() == 0


class TestEnsureDailyActions:
    def test_generates_once(self, r, today):
        first, created = ensure_daily_actions("founder-1", today, ArchetypeName.GROWTH_SEEKER, r=r)
        second, created_again = ensure_daily_actions("founder-1", today, ArchetypeName.GROWTH_SEEKER, r=r)

        assert created is True
        assert created_again is False
        assert [a.action_id for a in second] == [a.action_id for a in first]

    def test_existing_batch_ignores_new_risk(self, r, today):
        ensure_daily_actions("founder-1", today, ArchetypeName.GROWTH_SEEKER, r=r)
        actions, _ = ensure_daily_actions(
            "founder-1", today, ArchetypeName.GROWTH_SEEKER, _burnout(RiskLevel.CRITICAL), r=r
        )
        assert len(actions) == 3

    def test_force_replaces_batch(self, r, today):
        first, _ = ensure_daily_actions("founder-1", today, ArchetypeName.GROWTH_SEEKER, r=r)
        forced, created = ensure_daily_actions(
            "founder-1", today, ArchetypeName.GROWTH_SEEKER, force=True, r=r
        )

        assert created is True
        assert {a.action_id for a in forced}.isdisjoint(a.action_id for a in first)
        assert [a.text for a in forced] == [a.text for a in first]
        assert len(get_actions_for_date("founder-1", today, r)) == 3
        assert ActionItem.from_redis(r, first[0].action_id) is None
