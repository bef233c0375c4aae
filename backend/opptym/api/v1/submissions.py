"""
Directory submission endpoints.
"""
from uuid import UUID

from fastapi import APIRouter, status

from opptym.core.deps import CurrentUser, DbSession, enforce_usage
from opptym.core.exceptions import BadRequestError, NotFoundError
from opptym.models.submission import SubmissionStatus
from opptym.schemas.submission import SubmissionCreate, SubmissionResponse, SubmissionUpdate
from opptym.services.plan_limits import LimitCategory
from opptym.services.project_service import ProjectService
from opptym.services.usage_service import UsageContext, UsageService

router = APIRouter(prefix="/submissions", tags=["Submissions"])


@router.post("", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
async def create_submission(
    data: SubmissionCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> SubmissionResponse:
    """
    Record a directory submission for one of the user's projects.

    Checks the monthly submission ceiling and the per-project daily ceiling.
    A submission that passes is recorded as successful, and the first one
    moves a draft project to active.
    """
    if not data.project_id or not data.directory or not data.category:
        raise BadRequestError("Project ID, directory and category are required")

    projects = ProjectService(db)
    project = await projects.get_for_user(data.project_id, current_user.id)
    if not project:
        raise NotFoundError("Project")

    result = await UsageService(db).track_usage(
        current_user.id,
        LimitCategory.SUBMISSIONS,
        context=UsageContext(project_id=project.id),
    )
    enforce_usage(result)

    submission = await projects.create_submission(
        user_id=current_user.id,
        project_id=project.id,
        directory=data.directory,
        category=data.category,
        notes=data.notes,
    )
    return SubmissionResponse.model_validate(submission)


@router.patch("/{submission_id}", response_model=SubmissionResponse)
async def update_submission(
    submission_id: UUID,
    data: SubmissionUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> SubmissionResponse:
    """Update a submission's status.

    Marking a submission successful that was not already counted goes
    through the monthly ceiling and is refused once it is reached.
    """
    projects = ProjectService(db)
    submission = await projects.get_submission_for_user(submission_id, current_user.id)
    if not submission:
        raise NotFoundError("Submission")

    if data.status == SubmissionStatus.SUCCESS and submission.status != SubmissionStatus.SUCCESS:
        enforce_usage(await UsageService(db).track_usage(current_user.id, LimitCategory.SUBMISSIONS))

    submission = await projects.update_submission(submission, data)
    return SubmissionResponse.model_validate(submission)
