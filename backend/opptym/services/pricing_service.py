"""
Pricing plan store.

Admin-editable plans whose ceilings override the static limit table.
"""
import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from opptym.models.pricing import PricingPlan
from opptym.schemas.pricing import PricingPlanCreate, PricingPlanUpdate
from opptym.services.plan_limits import Found, LimitLookup, UseDefault, merge_overrides

logger = logging.getLogger(__name__)


DEFAULT_PRICING_PLANS = [
    {
        "name": "Free",
        "price": 0,
        "features": ["5 SEO tools", "1 project", "1 submission", "1 report"],
        "description": "Perfect for getting started",
        "max_projects": 1,
        "max_submissions": 1,
        "max_seo_tools": 5,
    },
    {
        "name": "Pro",
        "price": 1999,
        "features": ["1000 SEO tools", "15 projects", "750 submissions", "50 reports"],
        "description": "For growing businesses",
        "max_projects": 15,
        "max_submissions": 750,
        "max_seo_tools": 1000,
    },
    {
        "name": "Business",
        "price": 3999,
        "features": ["5000 SEO tools", "50 projects", "1500 submissions", "200 reports"],
        "description": "For established businesses",
        "max_projects": 50,
        "max_submissions": 1500,
        "max_seo_tools": 5000,
    },
    {
        "name": "Enterprise",
        "price": 9999,
        "features": ["Unlimited SEO tools", "Unlimited projects", "Unlimited submissions", "Unlimited reports"],
        "description": "For large organizations",
        "max_projects": -1,
        "max_submissions": -1,
        "max_seo_tools": -1,
    },
]


class PricingService:
    """Service for pricing plan operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def lookup_limits(self, plan: str) -> LimitLookup:
        """Find admin-defined ceilings for a plan name.

        Read failures are logged and treated as "no override".
        """
        try:
            result = await self.db.execute(
                select(PricingPlan).where(
                    func.lower(PricingPlan.name) == (plan or "").lower(),
                    PricingPlan.active.is_(True),
                )
            )
            custom = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.warning(f"Failed to fetch custom plan limits for {plan!r}: {e}")
            return UseDefault()

        if custom is None:
            return UseDefault()

        return Found(merge_overrides(
            plan,
            projects=custom.max_projects,
            submissions=custom.max_submissions,
            seo_tools=custom.max_seo_tools,
            backlinks=custom.max_backlinks,
            reports=custom.max_reports,
        ))

    async def get_by_id(self, plan_id: UUID) -> PricingPlan | None:
        result = await self.db.execute(select(PricingPlan).where(PricingPlan.id == plan_id))
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> PricingPlan | None:
        result = await self.db.execute(
            select(PricingPlan).where(func.lower(PricingPlan.name) == name.lower())
        )
        return result.scalar_one_or_none()

    async def list_plans(self, active_only: bool = False) -> list[PricingPlan]:
        """List plans ordered by price."""
        query = select(PricingPlan).order_by(PricingPlan.price.asc())
        if active_only:
            query = query.where(PricingPlan.active.is_(True))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def create(self, data: PricingPlanCreate) -> PricingPlan:
        plan = PricingPlan(**data.model_dump())
        self.db.add(plan)
        await self.db.flush()
        await self.db.refresh(plan)
        return plan

    async def update(self, plan_id: UUID, data: PricingPlanUpdate) -> PricingPlan | None:
        plan = await self.get_by_id(plan_id)
        if not plan:
            return None

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(plan, field, value)

        await self.db.flush()
        await self.db.refresh(plan)
        return plan

    async def delete(self, plan_id: UUID) -> bool:
        plan = await self.get_by_id(plan_id)
        if not plan:
            return False
        await self.db.delete(plan)
        await self.db.flush()
        return True

    async def seed_defaults(self) -> int:
        """Create the default plans when the table is empty. Returns the number created."""
        count = await self.db.scalar(select(func.count(PricingPlan.id)))
        if count:
            return 0

        logger.info("No pricing plans found, creating default plans")
        for data in DEFAULT_PRICING_PLANS:
            self.db.add(PricingPlan(active=True, **data))
        await self.db.flush()
        return len(DEFAULT_PRICING_PLANS)
