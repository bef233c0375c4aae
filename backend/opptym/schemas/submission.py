"""
Directory submission schemas.
"""
from datetime import datetime
from uuid import UUID

from opptym.models.submission import SubmissionStatus
from opptym.schemas.common import CamelSchema


class SubmissionCreate(CamelSchema):
    """Create submission request.

    Fields are optional at the schema level so a missing field yields the
    API's own 400 message instead of a validation error.
    """

    project_id: UUID | None = None
    directory: str | None = None
    category: str | None = None
    notes: str | None = None


class SubmissionUpdate(CamelSchema):
    status: SubmissionStatus
    notes: str | None = None


class SubmissionResponse(CamelSchema):
    """Submission response."""

    id: UUID
    project_id: UUID
    directory: str
    category: str
    status: SubmissionStatus
    submitted_at: datetime
    completed_at: datetime | None = None
    notes: str | None = None
