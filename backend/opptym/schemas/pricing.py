"""
Pricing plan schemas.
"""
from datetime import datetime
from uuid import UUID

from pydantic import Field

from opptym.schemas.common import CamelSchema


class PricingPlanBase(CamelSchema):
    """Fields shared by create and response. `None` ceilings use the static table."""

    name: str = Field(min_length=1, max_length=50)
    price: int = Field(ge=0, description="Monthly price in cents")
    features: list[str] = Field(default_factory=list)
    active: bool = True
    description: str | None = None
    max_projects: int | None = Field(default=None, ge=-1)
    max_submissions: int | None = Field(default=None, ge=-1)
    max_seo_tools: int | None = Field(default=None, ge=-1)
    max_backlinks: int | None = Field(default=None, ge=-1)
    max_reports: int | None = Field(default=None, ge=-1)


class PricingPlanCreate(PricingPlanBase):
    """Create pricing plan request."""


class PricingPlanUpdate(CamelSchema):
    """Partial update; only fields present in the body are applied."""

    name: str | None = Field(default=None, min_length=1, max_length=50)
    price: int | None = Field(default=None, ge=0)
    features: list[str] | None = None
    active: bool | None = None
    description: str | None = None
    max_projects: int | None = Field(default=None, ge=-1)
    max_submissions: int | None = Field(default=None, ge=-1)
    max_seo_tools: int | None = Field(default=None, ge=-1)
    max_backlinks: int | None = Field(default=None, ge=-1)
    max_reports: int | None = Field(default=None, ge=-1)


class PricingPlanResponse(PricingPlanBase):
    """Pricing plan response."""

    id: UUID
    created_at: datetime
    updated_at: datetime


class PricingPlanListResponse(CamelSchema):
    plans: list[PricingPlanResponse]
