"""
Dashboard usage endpoint.
"""
from fastapi import APIRouter

from opptym.core.deps import CurrentUser, DbSession
from opptym.core.exceptions import NotFoundError
from opptym.schemas.usage import CategoryUsage, DailyUsage, UsageStatsResponse
from opptym.services.plan_limits import (
    UNLIMITED_VALUE,
    LimitCategory,
    get_remaining_usage,
    get_usage_percentage,
)
from opptym.services.usage_service import UsageService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def display_ceiling(value: int) -> int | str:
    return "unlimited" if value == UNLIMITED_VALUE else value


@router.get("/usage", response_model=UsageStatsResponse)
async def get_usage(current_user: CurrentUser, db: DbSession) -> UsageStatsResponse:
    """
    Current plan, ceilings and counted usage for the authenticated user.

    Ceilings of -1 are shown as "unlimited".
    """
    stats = await UsageService(db).get_usage_stats(current_user.id)
    if stats is None:
        raise NotFoundError("User")

    usage = {}
    for category in LimitCategory:
        used = stats.usage[category.value]
        usage[category.value] = CategoryUsage(
            used=used,
            limit=display_ceiling(stats.limits.for_category(category)),
            remaining=display_ceiling(get_remaining_usage(stats.limits, category, used)),
            percentage=round(get_usage_percentage(stats.limits, category, used), 1),
            is_at_limit=stats.is_at_limit[category.value],
        )

    daily = stats.daily_limits
    return UsageStatsResponse(
        plan=stats.plan,
        usage=usage,
        daily=DailyUsage(
            submissions_per_project_per_day=display_ceiling(daily.submissions_per_project_per_day),
            seo_tools_per_day=display_ceiling(daily.seo_tools_per_day),
            reports_per_day=display_ceiling(daily.reports_per_day),
            submissions_today=stats.today_usage[LimitCategory.SUBMISSIONS.value],
            seo_tools_today=stats.today_usage[LimitCategory.SEO_TOOLS.value],
        ),
    )
