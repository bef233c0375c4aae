"""
Usage and limit schemas.
"""
from typing import Union

from pydantic import Field

from opptym.schemas.common import CamelSchema

# Ceilings are rendered as "unlimited" instead of -1
Ceiling = Union[int, str]


class CategoryUsage(CamelSchema):
    """Usage for a single category."""

    used: int
    limit: Ceiling
    remaining: Ceiling
    percentage: float = Field(..., description="Share of the ceiling in use, 0-100")
    is_at_limit: bool


class DailyUsage(CamelSchema):
    submissions_per_project_per_day: Ceiling
    seo_tools_per_day: Ceiling
    reports_per_day: Ceiling
    submissions_today: int
    seo_tools_today: int


class UsageStatsResponse(CamelSchema):
    """Dashboard usage summary."""

    plan: str
    usage: dict[str, CategoryUsage]
    daily: DailyUsage


class LimitErrorResponse(CamelSchema):
    """Body of a 403 returned when a ceiling blocks an action."""

    error: str = "Limit exceeded"
    limit_type: str
    current_usage: int | None = None
    limit: int | None = None
    message: str
