"""
Report export endpoints.
"""
import logging
from urllib.parse import urlparse

from fastapi import APIRouter, Response

from opptym.core.deps import CurrentUser, DbSession, Renderer, Scorer, enforce_usage
from opptym.core.exceptions import BadRequestError, NotFoundError, UpstreamError
from opptym.models.report import Report
from opptym.schemas.report import ReportExportRequest
from opptym.services.page_scorer import normalize_url
from opptym.services.plan_limits import LimitCategory
from opptym.services.project_service import ProjectService
from opptym.services.report_renderer import PdfTimeoutError, PdfUnavailableError, report_filename
from opptym.services.usage_service import UsageContext, UsageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["Reports"])

MEDIA_TYPES = {
    "html": "text/html; charset=utf-8",
    "pdf": "application/pdf",
}


@router.post("/export")
async def export_report(
    request: ReportExportRequest,
    current_user: CurrentUser,
    db: DbSession,
    scorer: Scorer,
    renderer: Renderer,
) -> Response:
    """
    Analyze a URL and download the result as an HTML or PDF report.

    When a project is given its website is used unless `url` is set.
    Counts against the monthly reports ceiling; a failed PDF render is not
    counted.
    """
    project = None
    if request.project_id is not None:
        project = await ProjectService(db).get_for_user(request.project_id, current_user.id)
        if not project:
            raise NotFoundError("Project")

    url = request.url or (project.website_url if project else None)
    if not url:
        raise BadRequestError("URL or project is required")

    enforce_usage(await UsageService(db).track_usage(
        current_user.id,
        LimitCategory.REPORTS,
        context=UsageContext(project_id=request.project_id),
    ))

    analysis = await scorer.analyze(url, "report")
    project_name = project.project_name if project else None
    html = renderer.render_html(analysis, project_name=project_name)

    if request.format == "pdf":
        try:
            content: bytes = await renderer.render_pdf(html)
        except PdfUnavailableError:
            logger.error("PDF export requested but Playwright is not installed")
            raise UpstreamError("PDF generation service is not available")
        except PdfTimeoutError:
            raise UpstreamError("PDF generation timed out")
    else:
        content = html.encode("utf-8")

    hostname = urlparse(normalize_url(url)).hostname or ""
    filename = report_filename(project_name or hostname, request.format)
    db.add(Report(
        user_id=current_user.id,
        project_id=request.project_id,
        url=analysis.url,
        format=request.format,
        filename=filename,
    ))
    await db.flush()

    return Response(
        content=content,
        media_type=MEDIA_TYPES[request.format],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
