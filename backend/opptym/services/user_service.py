"""
User service for business logic.
"""
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from opptym.config import settings
from opptym.core.security import hash_password, verify_password
from opptym.models.user import User, UserRole


class UserService:
    """Service for user operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get user by ID."""
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email (case-insensitive)."""
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def exists(self, email: str, username: str) -> bool:
        result = await self.db.execute(
            select(func.count(User.id)).where(
                or_(
                    func.lower(User.email) == email.lower(),
                    func.lower(User.username) == username.lower(),
                )
            )
        )
        return bool(result.scalar())

    async def create(
        self,
        email: str,
        username: str,
        password: str,
        name: str | None = None,
        role: UserRole = UserRole.USER,
        plan: str | None = None,
    ) -> User:
        """Create a new user on the default plan."""
        user = User(
            email=email.lower(),
            username=username,
            password_hash=hash_password(password),
            name=name,
            role=role,
            plan=plan or settings.DEFAULT_PLAN,
        )
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def authenticate(self, email: str, password: str) -> User | None:
        """Authenticate a user by email and password."""
        user = await self.get_by_email(email)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    async def update_last_login(self, user: User) -> None:
        user.last_login_at = datetime.now(timezone.utc)
        await self.db.flush()
