"""
Authentication endpoints.
"""
from fastapi import APIRouter, status

from opptym.core.deps import CurrentUser, DbSession
from opptym.core.exceptions import BadRequestError, ForbiddenError, UnauthorizedError
from opptym.core.security import create_access_token
from opptym.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from opptym.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, db: DbSession) -> AuthResponse:
    """Authenticate user and return access token."""
    user_service = UserService(db)

    user = await user_service.authenticate(request.email, request.password)
    if not user:
        raise UnauthorizedError("Invalid email or password")

    if user.is_banned:
        raise ForbiddenError("Account suspended")

    await user_service.update_last_login(user)

    return AuthResponse(
        access_token=create_access_token(data={"sub": str(user.id)}),
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, db: DbSession) -> AuthResponse:
    """Register a new user on the free plan."""
    user_service = UserService(db)

    if await user_service.exists(request.email, request.username):
        raise BadRequestError("Email or username already registered")

    user = await user_service.create(
        email=request.email,
        username=request.username,
        password=request.password,
        name=request.name,
    )

    return AuthResponse(
        access_token=create_access_token(data={"sub": str(user.id)}),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUser) -> UserResponse:
    """Get current user information."""
    return UserResponse.model_validate(current_user)
