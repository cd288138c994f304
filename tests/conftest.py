"""Pytest configuration and fixtures."""

import os

# Keep test runs from appending to the benchmarking CSV
os.environ["TIMING_LOG_PATH"] = ""

from collections.abc import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from blogsummarizer.api.dependencies import (  # noqa: E402
    get_content_acquirer,
    get_structured_extractor,
)
from blogsummarizer.infrastructure.database import get_session  # noqa: E402
from blogsummarizer.infrastructure.models import Base  # noqa: E402
from blogsummarizer.infrastructure.page_client import PageClient  # noqa: E402
from blogsummarizer.main import app  # noqa: E402
from blogsummarizer.services.acquirer import ContentAcquirer  # noqa: E402
from blogsummarizer.services.extractor import StructuredExtractor  # noqa: E402
from tests.helpers import FakeCompletionClient  # noqa: E402

# Test database URL (use SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def completion_client() -> FakeCompletionClient:
    """Canned completion client; tests may change ``response``."""
    return FakeCompletionClient()


@pytest.fixture
def page_client() -> MagicMock:
    """PageClient double that never touches the network."""
    client = MagicMock(spec=PageClient)
    client.fetch_text = AsyncMock(return_value="Fetched article text " * 20)
    client.close = AsyncMock()
    return client


@pytest.fixture
async def client(
    session_factory, completion_client, page_client
) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client wired to the test database and fakes."""

    async def _get_test_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = _get_test_session
    app.dependency_overrides[get_content_acquirer] = lambda: ContentAcquirer(
        page_client=page_client
    )
    app.dependency_overrides[get_structured_extractor] = lambda: StructuredExtractor(
        client=completion_client
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
