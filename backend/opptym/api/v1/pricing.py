"""
Public pricing endpoint.
"""
from fastapi import APIRouter

from opptym.core.deps import DbSession
from opptym.schemas.pricing import PricingPlanListResponse, PricingPlanResponse
from opptym.services.pricing_service import PricingService

router = APIRouter(prefix="/pricing", tags=["Pricing"])


@router.get("", response_model=PricingPlanListResponse)
async def list_active_plans(db: DbSession) -> PricingPlanListResponse:
    """Active pricing plans, cheapest first."""
    plans = await PricingService(db).list_plans(active_only=True)
    return PricingPlanListResponse(plans=[PricingPlanResponse.model_validate(p) for p in plans])
