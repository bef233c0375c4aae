"""
FastAPI dependencies for authentication and database.
"""
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from opptym.core.exceptions import ConflictError, LimitExceededError, NotFoundError
from opptym.core.security import decode_token
from opptym.database import get_db
from opptym.models.user import User, UserRole
from opptym.services.page_scorer import PageScorer
from opptym.services.plan_limits import LimitCategory
from opptym.services.report_renderer import ReportRenderer
from opptym.services.usage_service import UsageResult

security = HTTPBearer()


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    subject = payload.get("sub")
    if subject is None:
        raise credentials_exception

    try:
        user_id = UUID(subject)
    except ValueError:
        raise credentials_exception

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if user is None:
        raise credentials_exception

    return user


async def get_current_active_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Ensure the current user is not banned."""
    if current_user.is_banned:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account suspended",
        )
    return current_user


def require_roles(*roles: UserRole):
    """Dependency factory for role checking."""

    async def role_checker(
        current_user: Annotated[User, Depends(get_current_active_user)],
    ) -> User:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden - Admin access required",
            )
        return current_user

    return role_checker


def get_page_scorer() -> PageScorer:
    return PageScorer()


def get_report_renderer() -> ReportRenderer:
    return ReportRenderer()


# Common dependencies
CurrentUser = Annotated[User, Depends(get_current_active_user)]
AdminUser = Annotated[User, Depends(require_roles(UserRole.ADMIN))]
DbSession = Annotated[AsyncSession, Depends(get_db)]
Scorer = Annotated[PageScorer, Depends(get_page_scorer)]
Renderer = Annotated[ReportRenderer, Depends(get_report_renderer)]


def enforce_usage(result: UsageResult) -> None:
    """Turn a refused usage check into the matching HTTP error."""
    if result.success:
        return
    if result.not_found:
        raise NotFoundError("User")
    if result.conflict:
        raise ConflictError(result.message)

    label = LimitCategory(result.limit_type).label
    if result.daily:
        error = f"Daily {label} limit exceeded"
    else:
        error = f"{label[0].upper()}{label[1:]} limit exceeded"

    raise LimitExceededError(
        limit_type=result.limit_type,
        message=result.message or f"You have reached your {label} limit.",
        current_usage=result.current_usage,
        limit=result.limit,
        error=error,
    )
