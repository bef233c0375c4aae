"""
Pydantic schemas for the Opptym API.
"""
from opptym.schemas.common import (
    BaseSchema,
    CamelSchema,
    IDSchema,
    TimestampSchema,
    MessageResponse,
)
from opptym.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
    AuthResponse,
)
from opptym.schemas.project import ProjectCreate, ProjectResponse
from opptym.schemas.submission import SubmissionCreate, SubmissionUpdate, SubmissionResponse
from opptym.schemas.analysis import (
    AnalyzeRequest,
    AnalysisResult,
    AnalyzeResponse,
    ToolUsageResponse,
)
from opptym.schemas.pricing import (
    PricingPlanCreate,
    PricingPlanUpdate,
    PricingPlanResponse,
    PricingPlanListResponse,
)
from opptym.schemas.usage import UsageStatsResponse, LimitErrorResponse
from opptym.schemas.report import ReportExportRequest

__all__ = [
    "BaseSchema",
    "CamelSchema",
    "IDSchema",
    "TimestampSchema",
    "MessageResponse",
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserResponse",
    "AuthResponse",
    "ProjectCreate",
    "ProjectResponse",
    "SubmissionCreate",
    "SubmissionUpdate",
    "SubmissionResponse",
    "AnalyzeRequest",
    "AnalysisResult",
    "AnalyzeResponse",
    "ToolUsageResponse",
    "PricingPlanCreate",
    "PricingPlanUpdate",
    "PricingPlanResponse",
    "PricingPlanListResponse",
    "UsageStatsResponse",
    "LimitErrorResponse",
    "ReportExportRequest",
]
