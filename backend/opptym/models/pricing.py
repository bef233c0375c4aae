"""
Admin-editable pricing plans.
"""
from sqlalchemy import JSON, Boolean, Column, Integer, String, Text

from opptym.models.base import Base, BaseModel


class PricingPlan(Base, BaseModel):
    """Pricing plan with optional ceiling overrides.

    A NULL ceiling falls back to the static table for that category,
    -1 is unlimited.
    """

    __tablename__ = "pricing_plans"

    name = Column(String(50), unique=True, nullable=False, index=True)
    price = Column(Integer, nullable=False, default=0)  # cents
    features = Column(JSON, default=list)
    active = Column(Boolean, default=True, nullable=False)
    description = Column(Text, nullable=True)

    max_projects = Column(Integer, nullable=True)
    max_submissions = Column(Integer, nullable=True)
    max_seo_tools = Column(Integer, nullable=True)
    max_backlinks = Column(Integer, nullable=True)
    max_reports = Column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<PricingPlan {self.name}>"
