"""
Report export log.
"""
from sqlalchemy import Column, ForeignKey, String, Uuid

from opptym.models.base import Base, BaseModel


class Report(Base, BaseModel):
    """One row per exported report; counted against the monthly reports ceiling."""

    __tablename__ = "reports"

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="SET NULL"),
        nullable=True,
    )
    url = Column(String(2048), nullable=False)
    format = Column(String(10), nullable=False, default="html")
    filename = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Report {self.filename}>"
