"""
Unit tests for the static plan limit tables and comparisons.

Covers:
- Strictly-greater ceiling comparison
- -1 as unlimited
- Unknown plans falling back to free
- Admin override and custom limit resolution
"""
import dataclasses

import pytest

from opptym.services.plan_limits import (
    DAILY_LIMITS,
    SUBSCRIPTION_LIMITS,
    UNLIMITED,
    UNLIMITED_DAILY,
    Found,
    LimitCategory,
    PlanLimits,
    UseDefault,
    exceeds,
    get_daily_limits,
    get_plan_limits,
    get_remaining_usage,
    get_usage_percentage,
    is_limit_exceeded,
    merge_overrides,
    resolve_daily_limits,
    resolve_limits,
)


class TestLimitTables:
    """Test the static ceiling tables."""

    def test_free_plan_limits(self):
        limits = get_plan_limits("free")

        assert limits == PlanLimits(projects=1, submissions=1, seo_tools=5, backlinks=0, reports=1)

    def test_pro_plan_limits(self):
        limits = get_plan_limits("pro")

        assert limits.projects == 15
        assert limits.submissions == 750
        assert limits.seo_tools == 1000
        assert limits.backlinks == 100
        assert limits.reports == 50

    def test_business_plan_limits(self):
        limits = get_plan_limits("business")

        assert limits.projects == 50
        assert limits.submissions == 1500
        assert limits.seo_tools == 5000
        assert limits.backlinks == 500
        assert limits.reports == 200

    def test_enterprise_is_unlimited(self):
        assert get_plan_limits("enterprise") == UNLIMITED
        assert all(v == -1 for v in dataclasses.astuple(UNLIMITED))

    @pytest.mark.parametrize("plan", [None, "", "platinum", "legacy"])
    def test_unknown_plan_falls_back_to_free(self, plan):
        assert get_plan_limits(plan) == SUBSCRIPTION_LIMITS["free"]
        assert get_daily_limits(plan) == DAILY_LIMITS["free"]

    def test_plan_name_is_case_insensitive(self):
        assert get_plan_limits("Pro") == get_plan_limits("pro")
        assert get_plan_limits(" BUSINESS ") == get_plan_limits("business")

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            SUBSCRIPTION_LIMITS["free"] = UNLIMITED

        with pytest.raises(dataclasses.FrozenInstanceError):
            SUBSCRIPTION_LIMITS["free"].projects = 100

    def test_daily_limits(self):
        assert get_daily_limits("free").submissions_per_project_per_day == 1
        assert get_daily_limits("free").seo_tools_per_day == 5
        assert get_daily_limits("pro").seo_tools_per_day == 4
        assert get_daily_limits("business").seo_tools_per_day == -1
        assert get_daily_limits("enterprise").submissions_per_project_per_day == 20

    def test_wire_names(self):
        wire = get_plan_limits("free").to_wire()

        assert wire == {
            "projects": 1,
            "submissions": 1,
            "seoTools": 5,
            "backlinks": 0,
            "reports": 1,
        }


class TestLimitComparison:
    """Test the strictly-greater ceiling comparison."""

    def test_reaching_ceiling_is_allowed(self):
        assert exceeds(5, 5) is False

    def test_going_past_ceiling_is_blocked(self):
        assert exceeds(5, 6) is True

    def test_unlimited_never_blocks(self):
        assert exceeds(-1, 10**9) is False

    def test_zero_ceiling_blocks_first_unit(self):
        limits = get_plan_limits("free")

        assert is_limit_exceeded(limits, LimitCategory.BACKLINKS, 0) is False
        assert is_limit_exceeded(limits, LimitCategory.BACKLINKS, 1) is True

    @pytest.mark.parametrize("plan", ["free", "pro", "business"])
    @pytest.mark.parametrize("category", list(LimitCategory))
    def test_transition_to_ceiling_and_past_it(self, plan, category):
        limits = get_plan_limits(plan)
        ceiling = limits.for_category(category)

        assert is_limit_exceeded(limits, category, ceiling) is False
        assert is_limit_exceeded(limits, category, ceiling + 1) is True


class TestRemainingAndPercentage:
    """Test display helpers."""

    def test_remaining(self):
        limits = get_plan_limits("pro")

        assert get_remaining_usage(limits, LimitCategory.PROJECTS, 5) == 10
        assert get_remaining_usage(limits, LimitCategory.PROJECTS, 20) == 0

    def test_remaining_unlimited(self):
        assert get_remaining_usage(UNLIMITED, LimitCategory.SEO_TOOLS, 123) == -1

    def test_percentage(self):
        limits = get_plan_limits("free")

        assert get_usage_percentage(limits, LimitCategory.SEO_TOOLS, 2) == 40.0
        assert get_usage_percentage(limits, LimitCategory.SEO_TOOLS, 9) == 100.0

    def test_percentage_unlimited_and_zero_ceiling(self):
        assert get_usage_percentage(UNLIMITED, LimitCategory.PROJECTS, 50) == 0.0
        assert get_usage_percentage(get_plan_limits("free"), LimitCategory.BACKLINKS, 0) == 100.0


class TestLimitResolution:
    """Test admin override and custom plan resolution."""

    def test_admin_is_unlimited_regardless_of_plan(self):
        custom = Found(PlanLimits(projects=2, submissions=2, seo_tools=2, backlinks=2, reports=2))

        assert resolve_limits(True, "free", UseDefault()) == UNLIMITED
        assert resolve_limits(True, "pro", custom) == UNLIMITED
        assert resolve_daily_limits(True, "free") == UNLIMITED_DAILY

    def test_custom_limits_win(self):
        custom = PlanLimits(projects=3, submissions=10, seo_tools=20, backlinks=0, reports=2)

        assert resolve_limits(False, "free", Found(custom)) == custom

    def test_default_uses_static_table(self):
        assert resolve_limits(False, "pro", UseDefault()) == get_plan_limits("pro")

    def test_merge_overrides_keeps_static_values_for_missing_fields(self):
        merged = merge_overrides("pro", projects=20, seo_tools=None, reports=None)

        assert merged.projects == 20
        assert merged.seo_tools == 1000
        assert merged.reports == 50

    def test_merge_overrides_ignores_unknown_fields(self):
        merged = merge_overrides("free", storage=99)

        assert merged == get_plan_limits("free")
