"""
Project model.
"""
from enum import Enum as PyEnum

from sqlalchemy import Column, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from opptym.models.base import Base, BaseModel


class ProjectStatus(str, PyEnum):
    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class Project(Base, BaseModel):
    """A website a user promotes through submissions and SEO tools."""

    __tablename__ = "projects"

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    project_name = Column(String(100), nullable=False)
    website_url = Column(String(500), nullable=False)
    category = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    status = Column(
        Enum(ProjectStatus),
        default=ProjectStatus.DRAFT,
        nullable=False,
        index=True,
    )

    user = relationship("User", back_populates="projects")
    submissions = relationship("Submission", back_populates="project", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Project {self.project_name} ({self.status.value})>"
