"""
Backlink model.
"""
from enum import Enum as PyEnum

from sqlalchemy import Column, Enum, ForeignKey, String, Uuid

from opptym.models.base import Base, BaseModel


class BacklinkStatus(str, PyEnum):
    ACTIVE = "active"
    LOST = "lost"
    PENDING = "pending"
    DISAVOWED = "disavowed"


class Backlink(Base, BaseModel):
    """A tracked inbound link. Only active backlinks count toward plan usage."""

    __tablename__ = "backlinks"

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
    source_url = Column(String(2048), nullable=False)
    target_url = Column(String(2048), nullable=False)
    status = Column(
        Enum(BacklinkStatus),
        default=BacklinkStatus.ACTIVE,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Backlink {self.source_url} -> {self.target_url}>"
