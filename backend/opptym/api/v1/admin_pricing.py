"""
Admin pricing management endpoints.

Changes to a plan's ceilings take effect on the next usage check for
every user on that plan.
"""
import logging
from uuid import UUID

from fastapi import APIRouter, status

from opptym.core.deps import AdminUser, DbSession
from opptym.core.exceptions import ConflictError, NotFoundError
from opptym.schemas.common import MessageResponse
from opptym.schemas.pricing import (
    PricingPlanCreate,
    PricingPlanListResponse,
    PricingPlanResponse,
    PricingPlanUpdate,
)
from opptym.services.pricing_service import PricingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/pricing", tags=["Admin"])


@router.get("", response_model=PricingPlanListResponse)
async def list_plans(admin: AdminUser, db: DbSession) -> PricingPlanListResponse:
    """All plans, active or not. Default plans are created when none exist."""
    service = PricingService(db)
    await service.seed_defaults()
    plans = await service.list_plans()
    return PricingPlanListResponse(plans=[PricingPlanResponse.model_validate(p) for p in plans])


@router.post("", response_model=PricingPlanResponse, status_code=status.HTTP_201_CREATED)
async def create_plan(data: PricingPlanCreate, admin: AdminUser, db: DbSession) -> PricingPlanResponse:
    service = PricingService(db)
    if await service.get_by_name(data.name):
        raise ConflictError(f"Pricing plan '{data.name}' already exists")

    plan = await service.create(data)
    logger.info(f"Admin {admin.id} created pricing plan {plan.name}")
    return PricingPlanResponse.model_validate(plan)


@router.put("/{plan_id}", response_model=PricingPlanResponse)
async def update_plan(
    plan_id: UUID,
    data: PricingPlanUpdate,
    admin: AdminUser,
    db: DbSession,
) -> PricingPlanResponse:
    service = PricingService(db)
    if data.name:
        existing = await service.get_by_name(data.name)
        if existing and existing.id != plan_id:
            raise ConflictError(f"Pricing plan '{data.name}' already exists")

    plan = await service.update(plan_id, data)
    if not plan:
        raise NotFoundError("Pricing plan")

    logger.info(f"Admin {admin.id} updated pricing plan {plan.name}")
    return PricingPlanResponse.model_validate(plan)


@router.delete("/{plan_id}", response_model=MessageResponse)
async def delete_plan(plan_id: UUID, admin: AdminUser, db: DbSession) -> MessageResponse:
    if not await PricingService(db).delete(plan_id):
        raise NotFoundError("Pricing plan")

    logger.info(f"Admin {admin.id} deleted pricing plan {plan_id}")
    return MessageResponse(message="Pricing plan deleted")
