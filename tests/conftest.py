"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory SQLite database, session factory, fake chat models,
streamer doubles, and an ASGI-bound HTTP client for the assembled app
Dependencies: pytest, sqlalchemy, aiosqlite, langchain_core, httpx
System role: Test infrastructure and fixture management
"""

import uuid

import httpx
import pytest

from tests.helpers import RecordingChatModel


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine sharing one connection (StaticPool)
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool
    from backend.boundary.db.base import Base
    import backend.boundary.db.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    """Async session factory bound to the test engine."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_async_db(session_factory):
    """
    Provide a test database session.

    Yields:
        AsyncSession: Session with rollback on teardown
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def recording_model() -> RecordingChatModel:
    """Chat model double recording its inputs."""
    return RecordingChatModel()


@pytest.fixture
def streamer(recording_model: RecordingChatModel):
    """CompletionStreamer backed by the recording model."""
    from backend.core.completion_streamer import CompletionStreamer

    return CompletionStreamer(model=recording_model, model_id="test-model")


@pytest.fixture
def app(session_factory, streamer):
    """Assembled FastAPI app with database and provider overridden."""
    from backend.api.main import create_app
    from backend.api.deps import get_completion_streamer, get_session_factory
    from backend.boundary.db import get_async_db

    app = create_app()

    async def override_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_db] = override_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_completion_streamer] = lambda: streamer
    return app


@pytest.fixture
async def http_client(app):
    """httpx client calling the app in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver/api/v1") as client:
        yield client


@pytest.fixture
def conversation_id() -> uuid.UUID:
    """Generate a test conversation ID."""
    return uuid.uuid4()
