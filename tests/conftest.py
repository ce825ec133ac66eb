"""Pytest fixtures for testing."""

import os
from collections.abc import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-workflow-tests-only")

from editorial_workflow.core.database import get_db
from editorial_workflow.core.default_workflow import APPROVER, EDITOR, SYSADMIN, WRITER
from editorial_workflow.core.security import create_access_token
from editorial_workflow.main import app
from editorial_workflow.models.base import Base
from editorial_workflow.schemas.workflow import WorkflowDefinitionSchema
from editorial_workflow.services.workflow_definition_service import WorkflowDefinitionService
from editorial_workflow.services.workflow_repository import SqlWorkflowDefinitionRepository

# In-memory SQLite shared by every connection of one test engine
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture(scope="function")
async def db() -> AsyncGenerator[AsyncSession, None]:
    """Create test database session.

    Each test gets a fresh in-memory database with all tables created.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database dependency override.

    Args:
        db: Test database session

    Yields:
        AsyncClient configured for testing
    """

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers() -> Callable[..., dict[str, str]]:
    """Build bearer headers for an actor holding the given role names."""

    def _headers(actor_id: str, *roles: str) -> dict[str, str]:
        token = create_access_token(actor_id, roles=list(roles))
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def admin_headers(auth_headers) -> dict[str, str]:
    return auth_headers("admin-1", SYSADMIN)


@pytest.fixture()
def writer_headers(auth_headers) -> dict[str, str]:
    return auth_headers("writer-1", WRITER)


@pytest.fixture()
def editor_headers(auth_headers) -> dict[str, str]:
    return auth_headers("editor-1", EDITOR)


@pytest.fixture()
def approver_headers(auth_headers) -> dict[str, str]:
    return auth_headers("approver-1", APPROVER)


@pytest_asyncio.fixture
async def post_workflow(db: AsyncSession) -> WorkflowDefinitionSchema:
    """Committed default workflow governing the ``post`` content type."""
    service = WorkflowDefinitionService(SqlWorkflowDefinitionRepository(db))
    workflow = await service.create_default("post", "Post Workflow")
    await db.commit()
    return workflow


async def create_content(
    client: AsyncClient,
    headers: dict[str, str],
    content_type: str = "post",
    title: str = "Hello World",
) -> dict:
    """Create a content item through the API and return its JSON body."""
    response = await client.post(
        f"/api/content/{content_type}",
        json={"title": title},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


async def transition(
    client: AsyncClient,
    headers: dict[str, str],
    content_id: str,
    target_state: str,
    comment: str | None = None,
    content_type: str = "post",
):
    """Apply a transition through the API and return the raw response."""
    body: dict = {"target_state": target_state}
    if comment is not None:
        body["comment"] = comment
    return await client.post(
        f"/api/content/{content_type}/{content_id}/transition",
        json=body,
        headers=headers,
    )
