"""
Usage Accountant

Gatekeeps billable actions against plan ceilings and records consumption.

Usage is recomputed from stored rows (projects, successful submissions,
tool runs, active backlinks, exported reports) rather than taken from the
cached counters on the user, which are kept for display only. The cached
counter write-back is guarded by the user's version column, so two
concurrent actions cannot both pass the same check.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from opptym.models.backlink import Backlink, BacklinkStatus
from opptym.models.project import Project, ProjectStatus
from opptym.models.report import Report
from opptym.models.submission import Submission, SubmissionStatus
from opptym.models.tool_usage import SeoToolUsage
from opptym.models.user import User, UserRole
from opptym.services.plan_limits import (
    DailyLimits,
    LimitCategory,
    PlanLimits,
    UseDefault,
    exceeds,
    is_limit_exceeded,
    normalize_plan,
    resolve_daily_limits,
    resolve_limits,
)
from opptym.services.pricing_service import PricingService

logger = logging.getLogger(__name__)

CACHED_COUNTERS = {
    LimitCategory.PROJECTS: "usage_projects",
    LimitCategory.SUBMISSIONS: "usage_submissions",
    LimitCategory.SEO_TOOLS: "usage_seo_tools",
    LimitCategory.BACKLINKS: "usage_backlinks",
    LimitCategory.REPORTS: "usage_reports",
}

# Categories whose first use against a project moves it out of draft
PROMOTING_CATEGORIES = {LimitCategory.SUBMISSIONS, LimitCategory.SEO_TOOLS}


@dataclass
class UsageContext:
    """Optional scope of a billable action."""
    project_id: Optional[UUID] = None


@dataclass
class UsageResult:
    """Outcome of a usage check."""
    success: bool
    limit_type: str
    message: Optional[str] = None
    current_usage: Optional[int] = None
    limit: Optional[int] = None
    daily: bool = False
    not_found: bool = False
    conflict: bool = False


@dataclass
class UsageStats:
    """Plan, ceilings and counted usage for display."""
    plan: str
    limits: PlanLimits
    usage: dict[str, int]
    daily_limits: DailyLimits
    today_usage: dict[str, int]
    is_at_limit: dict[str, bool] = field(default_factory=dict)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_month(moment: datetime) -> datetime:
    return start_of_day(moment).replace(day=1)


def is_admin_role(role) -> bool:
    return role == UserRole.ADMIN


class UsageService:
    """Database-backed usage accounting for one request."""

    def __init__(
        self,
        db: AsyncSession,
        pricing: PricingService | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.pricing = pricing or PricingService(db)
        self.clock = clock

    async def get_user(self, user_id: UUID) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_plan_limits_with_custom(self, plan: str | None, role) -> PlanLimits:
        """Ceilings for a plan, honouring admin-defined overrides.

        Admins are unlimited whatever plan is stored on their account.
        """
        is_admin = is_admin_role(role)
        lookup = UseDefault() if is_admin else await self.pricing.lookup_limits(normalize_plan(plan))
        return resolve_limits(is_admin, plan, lookup)

    async def get_daily_limits_with_custom(self, plan: str | None, role) -> DailyLimits:
        return resolve_daily_limits(is_admin_role(role), plan)

    async def _count(self, query) -> int:
        return (await self.db.scalar(query)) or 0

    async def count_actual_usage(self, user_id: UUID, category: LimitCategory) -> int:
        """Count the stored rows that make up usage in a category."""
        month_start = start_of_month(self.clock())

        if category == LimitCategory.PROJECTS:
            query = select(func.count(Project.id)).where(Project.user_id == user_id)
        elif category == LimitCategory.SUBMISSIONS:
            query = select(func.count(Submission.id)).where(
                Submission.user_id == user_id,
                Submission.status == SubmissionStatus.SUCCESS,
                Submission.submitted_at >= month_start,
            )
        elif category == LimitCategory.SEO_TOOLS:
            query = select(func.count(SeoToolUsage.id)).where(
                SeoToolUsage.user_id == user_id,
                SeoToolUsage.created_at >= month_start,
            )
        elif category == LimitCategory.BACKLINKS:
            query = select(func.count(Backlink.id)).where(
                Backlink.user_id == user_id,
                Backlink.status == BacklinkStatus.ACTIVE,
            )
        else:
            query = select(func.count(Report.id)).where(
                Report.user_id == user_id,
                Report.created_at >= month_start,
            )

        return await self._count(query)

    async def count_all_usage(self, user_id: UUID) -> dict[str, int]:
        return {
            category.value: await self.count_actual_usage(user_id, category)
            for category in LimitCategory
        }

    async def count_today_submissions(self, user_id: UUID, project_id: UUID | None = None) -> int:
        """Submissions made since midnight UTC, any status, optionally for one project."""
        query = select(func.count(Submission.id)).where(
            Submission.user_id == user_id,
            Submission.submitted_at >= start_of_day(self.clock()),
        )
        if project_id is not None:
            query = query.where(Submission.project_id == project_id)
        return await self._count(query)

    async def count_today_tool_runs(self, user_id: UUID) -> int:
        return await self._count(
            select(func.count(SeoToolUsage.id)).where(
                SeoToolUsage.user_id == user_id,
                SeoToolUsage.created_at >= start_of_day(self.clock()),
            )
        )

    async def _check_daily(
        self,
        user: User,
        category: LimitCategory,
        increment: int,
        context: UsageContext,
    ) -> UsageResult | None:
        daily = await self.get_daily_limits_with_custom(user.plan, user.role)

        if category == LimitCategory.SUBMISSIONS and context.project_id is not None:
            ceiling = daily.submissions_per_project_per_day
            today = await self.count_today_submissions(user.id, context.project_id)
            scope = "submissions for this project"
        elif category == LimitCategory.SEO_TOOLS:
            ceiling = daily.seo_tools_per_day
            today = await self.count_today_tool_runs(user.id)
            scope = "SEO tool runs"
        else:
            return None

        if not exceeds(ceiling, today + increment):
            return None

        logger.info(
            f"Daily {category.value} limit reached for user {user.id}: "
            f"{today}/{ceiling}"
        )
        return UsageResult(
            success=False,
            limit_type=category.value,
            message=(
                f"You have reached your daily limit of {ceiling} {scope}. "
                "Please try again tomorrow or upgrade your plan."
            ),
            current_usage=today,
            limit=ceiling,
            daily=True,
        )

    async def _promote_project(self, user_id: UUID, project_id: UUID) -> None:
        result = await self.db.execute(
            select(Project).where(Project.id == project_id, Project.user_id == user_id)
        )
        project = result.scalar_one_or_none()
        if project is not None and project.status == ProjectStatus.DRAFT:
            project.status = ProjectStatus.ACTIVE
            await self.db.flush()
            logger.info(f"Project {project_id} promoted from draft to active")

    async def track_usage(
        self,
        user_id: UUID,
        category: LimitCategory | str,
        increment: int = 1,
        context: UsageContext | None = None,
    ) -> UsageResult:
        """
        Check an action against the monthly and daily ceilings and record it.

        Args:
            user_id: Acting user
            category: Usage category being consumed
            increment: Units the action consumes
            context: Optional project scope (daily per-project ceiling,
                draft promotion)

        Returns:
            UsageResult; a missing user is reported with `not_found=True`,
            a lost concurrent update with `conflict=True`
        """
        category = LimitCategory(category)
        context = context or UsageContext()

        user = await self.get_user(user_id)
        if user is None:
            return UsageResult(
                success=False,
                limit_type=category.value,
                message="User not found",
                not_found=True,
            )

        limits = await self.get_plan_limits_with_custom(user.plan, user.role)
        ceiling = limits.for_category(category)
        current = await self.count_actual_usage(user.id, category)
        projected = current + increment

        if is_limit_exceeded(limits, category, projected):
            logger.info(
                f"{category.value} limit reached for user {user.id} "
                f"(plan={user.plan}): {current}/{ceiling}"
            )
            return UsageResult(
                success=False,
                limit_type=category.value,
                message=f"You have reached your {category.label} limit. Please upgrade your plan to continue.",
                current_usage=current,
                limit=ceiling,
            )

        rejection = await self._check_daily(user, category, increment, context)
        if rejection is not None:
            return rejection

        setattr(user, CACHED_COUNTERS[category], projected)
        try:
            await self.db.flush()
        except StaleDataError:
            await self.db.rollback()
            logger.warning(f"Concurrent usage update for user {user_id} on {category.value}")
            return UsageResult(
                success=False,
                limit_type=category.value,
                message="Your usage changed while this request was processed. Please retry.",
                current_usage=current,
                limit=ceiling,
                conflict=True,
            )

        if category in PROMOTING_CATEGORIES and context.project_id is not None:
            await self._promote_project(user.id, context.project_id)

        logger.debug(f"Tracked {increment} {category.value} for user {user.id}: {projected}/{ceiling}")
        return UsageResult(
            success=True,
            limit_type=category.value,
            current_usage=projected,
            limit=ceiling,
        )

    async def get_usage_stats(self, user_id: UUID) -> UsageStats | None:
        """Assemble plan, ceilings and usage for display. None when the user is missing."""
        user = await self.get_user(user_id)
        if user is None:
            return None

        limits = await self.get_plan_limits_with_custom(user.plan, user.role)
        daily_limits = await self.get_daily_limits_with_custom(user.plan, user.role)
        usage = await self.count_all_usage(user.id)

        return UsageStats(
            plan=normalize_plan(user.plan),
            limits=limits,
            usage=usage,
            daily_limits=daily_limits,
            today_usage={
                LimitCategory.SUBMISSIONS.value: await self.count_today_submissions(user.id),
                LimitCategory.SEO_TOOLS.value: await self.count_today_tool_runs(user.id),
            },
            is_at_limit={
                category.value: is_limit_exceeded(limits, category, usage[category.value])
                for category in LimitCategory
            },
        )

    async def reconcile_cached_usage(self, user_id: UUID) -> None:
        """Rewrite the cached counters from counted rows (after deletions)."""
        user = await self.get_user(user_id)
        if user is None:
            return

        usage = await self.count_all_usage(user.id)
        for category, attr in CACHED_COUNTERS.items():
            setattr(user, attr, usage[category.value])
        await self.db.flush()
