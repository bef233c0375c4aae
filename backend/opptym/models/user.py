"""
User model with plan tier, role and cached usage counters.
"""
from enum import Enum as PyEnum

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String
from sqlalchemy.orm import relationship

from opptym.models.base import Base, BaseModel


class UserRole(str, PyEnum):
    USER = "user"
    ADMIN = "admin"


class PlanTier(str, PyEnum):
    FREE = "free"
    PRO = "pro"
    BUSINESS = "business"
    ENTERPRISE = "enterprise"


class User(Base, BaseModel):
    """Account holder. Users are never hard-deleted; `is_banned` is the soft ban."""

    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(30), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole),
        default=UserRole.USER,
        nullable=False,
    )
    # Plain string so that a stale or unknown tier resolves to the free plan
    plan = Column(String(50), default=PlanTier.FREE.value, nullable=False)
    is_banned = Column(Boolean, default=False, nullable=False)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    # Cached usage counters. Limits are enforced against counted rows;
    # these are a best-effort cache for display.
    usage_projects = Column(Integer, default=0, nullable=False)
    usage_submissions = Column(Integer, default=0, nullable=False)
    usage_seo_tools = Column(Integer, default=0, nullable=False)
    usage_backlinks = Column(Integer, default=0, nullable=False)
    usage_reports = Column(Integer, default=0, nullable=False)
    usage_version = Column(Integer, default=1, nullable=False)

    projects = relationship("Project", back_populates="user", cascade="all, delete-orphan")

    __mapper_args__ = {"version_id_col": usage_version}

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role.value}, {self.plan})>"
