"""
SEO tool usage log.
"""
from sqlalchemy import JSON, Column, ForeignKey, Integer, String, Uuid

from opptym.models.base import Base, BaseModel


class SeoToolUsage(Base, BaseModel):
    """One row per tool run. Kept for history only; results are never re-validated."""

    __tablename__ = "seo_tool_usage"

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
        index=True,
    )
    tool_type = Column(String(100), nullable=False, index=True)
    url = Column(String(2048), nullable=False)
    score = Column(Integer, nullable=True)
    result = Column(JSON, default=dict)

    def __repr__(self) -> str:
        return f"<SeoToolUsage {self.tool_type} {self.url}>"
