"""
Directory submission model.
"""
from enum import Enum as PyEnum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from opptym.models.base import Base, BaseModel, utcnow


class SubmissionStatus(str, PyEnum):
    SUCCESS = "success"
    PENDING = "pending"
    REJECTED = "rejected"
    FAILED = "failed"


class Submission(Base, BaseModel):
    """A listing submitted to a directory on behalf of a project."""

    __tablename__ = "submissions"

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    directory = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)
    status = Column(
        Enum(SubmissionStatus),
        default=SubmissionStatus.PENDING,
        nullable=False,
        index=True,
    )
    submitted_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)

    project = relationship("Project", back_populates="submissions")

    def __repr__(self) -> str:
        return f"<Submission {self.directory} ({self.status.value})>"
