"""
Project and submission service.

Plan ceilings are checked by the routes through UsageService before any
of these methods creates a row.
"""
import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from opptym.models.project import Project
from opptym.models.submission import Submission, SubmissionStatus
from opptym.schemas.project import ProjectCreate
from opptym.schemas.submission import SubmissionUpdate

logger = logging.getLogger(__name__)

FINAL_STATUSES = {SubmissionStatus.SUCCESS, SubmissionStatus.REJECTED, SubmissionStatus.FAILED}


class ProjectService:
    """Service for project operations scoped to one owner."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_user(self, user_id: UUID) -> list[Project]:
        result = await self.db.execute(
            select(Project)
            .where(Project.user_id == user_id)
            .order_by(Project.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_for_user(self, project_id: UUID, user_id: UUID) -> Project | None:
        """Get a project only if it belongs to the user."""
        result = await self.db.execute(
            select(Project).where(Project.id == project_id, Project.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def create(self, user_id: UUID, data: ProjectCreate) -> Project:
        project = Project(user_id=user_id, **data.model_dump())
        self.db.add(project)
        await self.db.flush()
        await self.db.refresh(project)
        logger.info(f"Created project {project.id} for user {user_id}")
        return project

    async def delete(self, project: Project) -> None:
        await self.db.delete(project)
        await self.db.flush()
        logger.info(f"Deleted project {project.id}")

    async def create_submission(
        self,
        user_id: UUID,
        project_id: UUID,
        directory: str,
        category: str,
        notes: str | None = None,
    ) -> Submission:
        submission = Submission(
            user_id=user_id,
            project_id=project_id,
            directory=directory,
            category=category,
            notes=notes,
            status=SubmissionStatus.SUCCESS,
            completed_at=datetime.now(timezone.utc),
        )
        self.db.add(submission)
        await self.db.flush()
        await self.db.refresh(submission)
        return submission

    async def get_submission_for_user(self, submission_id: UUID, user_id: UUID) -> Submission | None:
        result = await self.db.execute(
            select(Submission).where(
                Submission.id == submission_id,
                Submission.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def update_submission(self, submission: Submission, data: SubmissionUpdate) -> Submission:
        """Set the submission status; final statuses stamp `completed_at`."""
        submission.status = data.status
        if data.notes is not None:
            submission.notes = data.notes
        if data.status in FINAL_STATUSES:
            submission.completed_at = datetime.now(timezone.utc)
        await self.db.flush()
        await self.db.refresh(submission)
        return submission
