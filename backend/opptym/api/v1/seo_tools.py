"""
SEO tool endpoints.
"""
import logging

from fastapi import APIRouter, Query
from sqlalchemy import select

from opptym.core.deps import CurrentUser, DbSession, Scorer, enforce_usage
from opptym.core.exceptions import BadRequestError, NotFoundError
from opptym.models.tool_usage import SeoToolUsage
from opptym.schemas.analysis import (
    AnalyzeRequest,
    AnalyzeResponse,
    ToolUsageResponse,
    ToolUsageSummary,
)
from opptym.services.plan_limits import LimitCategory
from opptym.services.project_service import ProjectService
from opptym.services.usage_service import UsageContext, UsageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/seo-tools", tags=["SEO Tools"])


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
    request: AnalyzeRequest,
    current_user: CurrentUser,
    db: DbSession,
    scorer: Scorer,
) -> AnalyzeResponse:
    """
    Run the page analyzer on a URL.

    Counts against the monthly and daily SEO tool ceilings. Unreachable pages
    still return 200 with a zeroed result and count as a run.
    """
    if not request.url or not request.tool_type:
        raise BadRequestError("URL and tool type are required")

    if request.project_id is not None:
        project = await ProjectService(db).get_for_user(request.project_id, current_user.id)
        if not project:
            raise NotFoundError("Project")

    result = await UsageService(db).track_usage(
        current_user.id,
        LimitCategory.SEO_TOOLS,
        context=UsageContext(project_id=request.project_id),
    )
    enforce_usage(result)

    analysis = await scorer.analyze(request.url, request.tool_type)

    usage = SeoToolUsage(
        user_id=current_user.id,
        project_id=request.project_id,
        tool_type=request.tool_type,
        url=analysis.url,
        score=analysis.overall_score,
        result=analysis.model_dump(mode="json", by_alias=True),
    )
    db.add(usage)
    await db.flush()

    return AnalyzeResponse(
        data=analysis,
        usage=ToolUsageSummary(
            tool_type=request.tool_type,
            url=analysis.url,
            score=analysis.overall_score,
            timestamp=analysis.timestamp,
        ),
    )


@router.get("/history", response_model=list[ToolUsageResponse])
async def get_history(
    current_user: CurrentUser,
    db: DbSession,
    limit: int = Query(default=20, ge=1, le=100),
    include_results: bool = Query(default=False, alias="includeResults"),
) -> list[ToolUsageResponse]:
    """Latest tool runs for the current user, newest first."""
    rows = await db.execute(
        select(SeoToolUsage)
        .where(SeoToolUsage.user_id == current_user.id)
        .order_by(SeoToolUsage.created_at.desc())
        .limit(limit)
    )

    history = []
    for row in rows.scalars().all():
        item = ToolUsageResponse.model_validate(row)
        if not include_results:
            item.result = None
        history.append(item)
    return history
