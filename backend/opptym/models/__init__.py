"""
SQLAlchemy models for Opptym.
"""
from opptym.models.base import Base, BaseModel
from opptym.models.user import PlanTier, User, UserRole
from opptym.models.project import Project, ProjectStatus
from opptym.models.submission import Submission, SubmissionStatus
from opptym.models.tool_usage import SeoToolUsage
from opptym.models.backlink import Backlink, BacklinkStatus
from opptym.models.report import Report
from opptym.models.pricing import PricingPlan

__all__ = [
    "Base",
    "BaseModel",
    "User",
    "UserRole",
    "PlanTier",
    "Project",
    "ProjectStatus",
    "Submission",
    "SubmissionStatus",
    "SeoToolUsage",
    "Backlink",
    "BacklinkStatus",
    "Report",
    "PricingPlan",
]
