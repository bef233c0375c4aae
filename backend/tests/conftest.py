"""
Pytest configuration and fixtures for Opptym tests.
"""
import os
import uuid
from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Settings are read at import time
os.environ.setdefault("JWT_SECRET", "test-secret-key-not-for-production")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"

from opptym.core.deps import get_page_scorer
from opptym.core.security import hash_password
from opptym.database import get_db
from opptym.models import Base, PlanTier, User, UserRole
from opptym.services.page_scorer import PageScorer, RandomSimulator
from tests.fixtures.sample_pages import EXAMPLE_PAGE_HTML, PERFECT_PAGE_HTML
from tests.fixtures.users import (
    ADMIN_USER_ID,
    BANNED_USER_ID,
    ENTERPRISE_USER_ID,
    FREE_USER_ID,
    PRO_USER_ID,
    TEST_PASSWORD,
    bearer,
)

# Use SQLite for testing (in-memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


def make_user(user_id: uuid.UUID, name: str, plan: str, **kwargs) -> User:
    return User(
        id=user_id,
        email=f"{name}@example.com",
        username=name,
        name=name.title(),
        password_hash=TEST_PASSWORD_HASH,
        plan=plan,
        **kwargs,
    )


@pytest_asyncio.fixture(scope="function")
async def db_session_with_data(db_session: AsyncSession) -> AsyncSession:
    """Database session with one user per plan tier, an admin and a banned user."""
    db_session.add_all([
        make_user(FREE_USER_ID, "freeuser", PlanTier.FREE.value),
        make_user(PRO_USER_ID, "prouser", PlanTier.PRO.value),
        make_user(ENTERPRISE_USER_ID, "bigcorp", PlanTier.ENTERPRISE.value),
        make_user(ADMIN_USER_ID, "admin", PlanTier.FREE.value, role=UserRole.ADMIN),
        make_user(BANNED_USER_ID, "banned", PlanTier.PRO.value, is_banned=True),
    ])
    await db_session.commit()

    return db_session


# ============================================================================
# FastAPI App Fixtures
# ============================================================================

def page_handler(request: httpx.Request) -> httpx.Response:
    """Serve the sample pages; anything else is a 404."""
    host = request.url.host
    if host == "example.com":
        return httpx.Response(200, html=EXAMPLE_PAGE_HTML)
    if host == "perfect.example.com":
        return httpx.Response(200, html=PERFECT_PAGE_HTML)
    return httpx.Response(404, text="Not Found")


@pytest_asyncio.fixture(scope="function")
async def page_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client that never leaves the process."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(page_handler)) as client:
        yield client


@pytest.fixture
def page_scorer(page_client: httpx.AsyncClient) -> PageScorer:
    return PageScorer(simulator=RandomSimulator(seed=42), client=page_client)


@pytest.fixture(scope="function")
def app(db_session: AsyncSession, page_scorer: PageScorer) -> FastAPI:
    """Create test FastAPI application."""
    from opptym.main import app as main_app

    async def override_get_db():
        yield db_session

    main_app.dependency_overrides[get_db] = override_get_db
    main_app.dependency_overrides[get_page_scorer] = lambda: page_scorer

    yield main_app

    main_app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ============================================================================
# Authentication Fixtures
# ============================================================================

@pytest.fixture
def auth_headers() -> dict:
    """Headers for the free-plan user."""
    return bearer(FREE_USER_ID)


@pytest.fixture
def pro_headers() -> dict:
    return bearer(PRO_USER_ID)


@pytest.fixture
def admin_headers() -> dict:
    return bearer(ADMIN_USER_ID)


@pytest.fixture
def banned_headers() -> dict:
    return bearer(BANNED_USER_ID)


# ============================================================================
# Utility Fixtures
# ============================================================================

@pytest.fixture
def free_user_id() -> uuid.UUID:
    return FREE_USER_ID


@pytest.fixture
def pro_user_id() -> uuid.UUID:
    return PRO_USER_ID


@pytest.fixture
def enterprise_user_id() -> uuid.UUID:
    return ENTERPRISE_USER_ID


@pytest.fixture
def admin_user_id() -> uuid.UUID:
    return ADMIN_USER_ID
