"""
SEO analysis schemas.

Field names are camelCase on the wire to match what the dashboard renders.
"""
from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import Field

from opptym.schemas.common import CamelSchema

Status = Literal["good", "warning", "error"]
Priority = Literal["high", "medium", "low"]


class AnalyzeRequest(CamelSchema):
    """Body of POST /seo-tools/analyze. Required fields are checked by the route."""

    url: str | None = None
    tool_type: str | None = None
    project_id: UUID | None = None


class FieldAnalysis(CamelSchema):
    content: str = ""
    status: Status
    recommendation: str


class LengthFieldAnalysis(FieldAnalysis):
    length: int = 0


class OpenGraphAnalysis(CamelSchema):
    title: str = ""
    description: str = ""
    image: str = ""
    url: str = ""
    status: Status
    recommendation: str


class MetaTagsAnalysis(CamelSchema):
    title: LengthFieldAnalysis
    description: LengthFieldAnalysis
    keywords: FieldAnalysis
    viewport: FieldAnalysis
    robots: FieldAnalysis
    open_graph: OpenGraphAnalysis
    canonical: FieldAnalysis


class LinkCheck(CamelSchema):
    url: str
    status: int
    type: Literal["internal", "external"]
    found_on: str
    impact: Priority


class BrokenLinksAnalysis(CamelSchema):
    total: int = 0
    broken: int = 0
    working: int = 0
    redirects: int = 0
    health_score: int = 0
    links: list[LinkCheck] = Field(default_factory=list)
    simulated: bool = True


class ImageCheck(CamelSchema):
    src: str
    alt: str
    status: Status
    recommendation: str


class AltTextAnalysis(CamelSchema):
    total_images: int = 0
    missing_alt: int = 0
    duplicate_alt: int = 0
    health_score: int = 0
    images: list[ImageCheck] = Field(default_factory=list)


class PerformanceMetrics(CamelSchema):
    first_contentful_paint: float = 0
    largest_contentful_paint: float = 0
    first_input_delay: float = 0
    cumulative_layout_shift: float = 0


class AuditIssue(CamelSchema):
    type: Literal["error", "warning", "info"]
    message: str
    severity: Priority


class PerformanceSection(CamelSchema):
    score: int = 0
    status: Status = "error"
    metrics: PerformanceMetrics = Field(default_factory=PerformanceMetrics)


class AuditSection(CamelSchema):
    score: int = 0
    status: Status = "error"
    issues: list[AuditIssue] = Field(default_factory=list)


class PageSpeed(CamelSchema):
    overall_score: int = 0
    performance: PerformanceSection = Field(default_factory=PerformanceSection)
    accessibility: AuditSection = Field(default_factory=AuditSection)
    best_practices: AuditSection = Field(default_factory=AuditSection)
    seo: AuditSection = Field(default_factory=AuditSection)
    simulated: bool = True


class Recommendation(CamelSchema):
    category: str
    priority: Priority
    title: str
    description: str
    impact: str


class AnalysisResult(CamelSchema):
    """Full output of one page analysis."""

    url: str
    timestamp: datetime
    overall_score: int
    broken_links: BrokenLinksAnalysis
    meta_tags: MetaTagsAnalysis
    alt_text: AltTextAnalysis
    page_speed: PageSpeed
    recommendations: list[Recommendation]


class ToolUsageSummary(CamelSchema):
    tool_type: str
    url: str
    score: int
    timestamp: datetime


class AnalyzeResponse(CamelSchema):
    success: bool = True
    data: AnalysisResult
    usage: ToolUsageSummary


class ToolUsageResponse(CamelSchema):
    """A stored tool run for the history view."""

    id: UUID
    tool_type: str
    url: str
    score: int | None = None
    project_id: UUID | None = None
    created_at: datetime
    result: dict[str, Any] | None = None
