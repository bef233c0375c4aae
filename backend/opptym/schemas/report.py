"""
Report export schemas.
"""
from typing import Literal
from uuid import UUID

from opptym.schemas.common import CamelSchema


class ReportExportRequest(CamelSchema):
    """Body of POST /reports/export. Either `url` or `projectId` must be given."""

    url: str | None = None
    format: Literal["html", "pdf"] = "html"
    project_id: UUID | None = None
