"""
Plan Limits

Static ceiling tables per plan tier and the pure comparisons used by the
usage accountant. A ceiling of -1 means unlimited.

The comparison is strictly-greater: with a ceiling of N a user may hold
0..N units, and only the step from N to N+1 is blocked.
"""

from dataclasses import dataclass, fields, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union

UNLIMITED_VALUE = -1


class LimitCategory(str, Enum):
    """Billable usage categories (wire names are camelCase)."""
    PROJECTS = "projects"
    SUBMISSIONS = "submissions"
    SEO_TOOLS = "seoTools"
    BACKLINKS = "backlinks"
    REPORTS = "reports"

    @property
    def field_name(self) -> str:
        return _CATEGORY_FIELDS[self]

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_FIELDS = {
    LimitCategory.PROJECTS: "projects",
    LimitCategory.SUBMISSIONS: "submissions",
    LimitCategory.SEO_TOOLS: "seo_tools",
    LimitCategory.BACKLINKS: "backlinks",
    LimitCategory.REPORTS: "reports",
}

_CATEGORY_LABELS = {
    LimitCategory.PROJECTS: "projects",
    LimitCategory.SUBMISSIONS: "submissions",
    LimitCategory.SEO_TOOLS: "SEO tools",
    LimitCategory.BACKLINKS: "backlinks",
    LimitCategory.REPORTS: "reports",
}


@dataclass(frozen=True)
class PlanLimits:
    """Monthly (or lifetime, for projects and backlinks) ceilings."""
    projects: int
    submissions: int
    seo_tools: int
    backlinks: int
    reports: int

    def for_category(self, category: LimitCategory) -> int:
        return getattr(self, category.field_name)

    def to_wire(self) -> dict[str, int]:
        return {category.value: self.for_category(category) for category in LimitCategory}


@dataclass(frozen=True)
class DailyLimits:
    """Same-day ceilings checked in addition to the monthly ones."""
    submissions_per_project_per_day: int
    seo_tools_per_day: int
    reports_per_day: int


UNLIMITED = PlanLimits(
    projects=UNLIMITED_VALUE,
    submissions=UNLIMITED_VALUE,
    seo_tools=UNLIMITED_VALUE,
    backlinks=UNLIMITED_VALUE,
    reports=UNLIMITED_VALUE,
)

UNLIMITED_DAILY = DailyLimits(
    submissions_per_project_per_day=UNLIMITED_VALUE,
    seo_tools_per_day=UNLIMITED_VALUE,
    reports_per_day=UNLIMITED_VALUE,
)

DEFAULT_PLAN = "free"

SUBSCRIPTION_LIMITS: Mapping[str, PlanLimits] = MappingProxyType({
    "free": PlanLimits(projects=1, submissions=1, seo_tools=5, backlinks=0, reports=1),
    "pro": PlanLimits(projects=15, submissions=750, seo_tools=1000, backlinks=100, reports=50),
    "business": PlanLimits(projects=50, submissions=1500, seo_tools=5000, backlinks=500, reports=200),
    "enterprise": UNLIMITED,
})

DAILY_LIMITS: Mapping[str, DailyLimits] = MappingProxyType({
    "free": DailyLimits(submissions_per_project_per_day=1, seo_tools_per_day=5, reports_per_day=1),
    "pro": DailyLimits(submissions_per_project_per_day=5, seo_tools_per_day=4, reports_per_day=5),
    "business": DailyLimits(submissions_per_project_per_day=10, seo_tools_per_day=-1, reports_per_day=10),
    "enterprise": DailyLimits(submissions_per_project_per_day=20, seo_tools_per_day=-1, reports_per_day=-1),
})


@dataclass(frozen=True)
class Found:
    """An admin-defined override exists for the plan."""
    limits: PlanLimits


@dataclass(frozen=True)
class UseDefault:
    """No usable override; the static table applies."""


LimitLookup = Union[Found, UseDefault]


def normalize_plan(plan: str | None) -> str:
    return (plan or DEFAULT_PLAN).strip().lower()


def get_plan_limits(plan: str | None) -> PlanLimits:
    """Static ceilings for a plan; unknown plans get the free tier."""
    return SUBSCRIPTION_LIMITS.get(normalize_plan(plan), SUBSCRIPTION_LIMITS[DEFAULT_PLAN])


def get_daily_limits(plan: str | None) -> DailyLimits:
    """Static daily ceilings for a plan; unknown plans get the free tier."""
    return DAILY_LIMITS.get(normalize_plan(plan), DAILY_LIMITS[DEFAULT_PLAN])


def merge_overrides(plan: str | None, **overrides: int | None) -> PlanLimits:
    """Apply non-null per-category overrides on top of the static ceilings."""
    base = get_plan_limits(plan)
    known = {f.name for f in fields(PlanLimits)}
    changes = {
        name: value
        for name, value in overrides.items()
        if name in known and value is not None
    }
    return replace(base, **changes)


def resolve_limits(is_admin: bool, plan: str | None, lookup: LimitLookup) -> PlanLimits:
    """Admins are unlimited; everyone else gets the override or the static table."""
    if is_admin:
        return UNLIMITED
    if isinstance(lookup, Found):
        return lookup.limits
    return get_plan_limits(plan)


def resolve_daily_limits(is_admin: bool, plan: str | None) -> DailyLimits:
    # Daily ceilings are not configurable through pricing plans
    if is_admin:
        return UNLIMITED_DAILY
    return get_daily_limits(plan)


def exceeds(ceiling: int, projected_usage: int) -> bool:
    if ceiling == UNLIMITED_VALUE:
        return False
    return projected_usage > ceiling


def is_limit_exceeded(limits: PlanLimits, category: LimitCategory, projected_usage: int) -> bool:
    """True when `projected_usage` goes past the category ceiling."""
    return exceeds(limits.for_category(category), projected_usage)


def get_remaining_usage(limits: PlanLimits, category: LimitCategory, current_usage: int) -> int:
    """Units left before the ceiling, or -1 when unlimited."""
    ceiling = limits.for_category(category)
    if ceiling == UNLIMITED_VALUE:
        return UNLIMITED_VALUE
    return max(0, ceiling - current_usage)


def get_usage_percentage(limits: PlanLimits, category: LimitCategory, current_usage: int) -> float:
    """Share of the ceiling in use, capped at 100. Unlimited and zero ceilings report 0 and 100."""
    ceiling = limits.for_category(category)
    if ceiling == UNLIMITED_VALUE:
        return 0.0
    if ceiling == 0:
        return 100.0
    return min(100.0, current_usage / ceiling * 100)
