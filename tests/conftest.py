"""Pytest configuration and shared fixtures."""

import os
import uuid
from datetime import datetime, timezone
from typing import Callable
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

# Set required environment variables for testing BEFORE importing app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-at-least-32-bytes")
os.environ.setdefault("AI_GATEWAY_API_KEY", "test-ai-key")
os.environ.setdefault("RESEND_API_KEY", "test-resend-key")

from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from fra_atlas.core.database import Base
from fra_atlas.database import models  # noqa: F401
from fra_atlas.main import app
from fra_atlas.schemas.profiles import ProfileResponse, Role


@pytest.fixture
def test_client() -> TestClient:
    """Create FastAPI test client.

    Returns:
        TestClient: FastAPI test client instance
    """
    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    """Ensure FastAPI dependency overrides are reset between tests."""
    app.dependency_overrides = {}
    yield
    app.dependency_overrides = {}


@pytest_asyncio.fixture
async def db_session():
    """Session on a fresh in-memory SQLite database with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, expire_on_commit=False)
    async with session_maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def make_profile() -> Callable[..., ProfileResponse]:
    """Build a ProfileResponse for a given role without touching the database."""

    def _make(role: Role = Role.CITIZEN, user_id: str = None, email: str = None, **fields) -> ProfileResponse:
        now = datetime.now(timezone.utc)
        user_id = user_id or str(uuid.uuid4())
        return ProfileResponse(
            id=uuid.uuid4(),
            user_id=user_id,
            email=email or f"{role.value}-{user_id[:8]}@example.com",
            role=role,
            created_at=now,
            updated_at=now,
            **fields,
        )

    return _make


@pytest.fixture
def sample_pdf_content() -> bytes:
    """Minimal PDF body for upload tests."""
    return b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n<<\n/Type /Catalog\n/Pages 2 0 R\n>>\nendobj\n"


@pytest.fixture
def mock_httpx_client() -> Mock:
    """Create mock httpx client usable as an async context manager.

    Returns:
        Mock: Mocked httpx client
    """
    client = Mock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)
    return client
