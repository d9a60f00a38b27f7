"""Pytest configuration and fixtures."""

import json
import os
import sys
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable
from uuid import uuid4

# No remote services in tests
os.environ["SUPABASE_URL"] = ""
os.environ["AI_API_KEY"] = ""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities.chat import ChatMessage
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base, PostModel, ProfileModel, ThreadModel
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.realtime.in_process import InProcessRealtimeProvider

# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed test user ID for consistency
TEST_USER_ID = uuid4()

TEST_AUTH_URL = "https://campus.supabase.co/auth/v1"


class ScriptedAssistant:
    """Assistant double that answers with a fixed reply and records transcripts."""

    def __init__(self, reply: str = "Try the library's quiet floor.") -> None:
        self.reply_text = reply
        self.transcripts: list[list[ChatMessage]] = []

    async def reply(self, transcript: list[ChatMessage]) -> str:
        self.transcripts.append(list(transcript))
        return self.reply_text


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test, one shared connection."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        # SQLite ignores REFERENCES unless asked; Postgres always enforces them
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(
    engine: AsyncEngine,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create session factory."""
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    yield factory


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of Work factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def test_user() -> TokenUser:
    """Create a test user with fixed ID."""
    return TokenUser(
        id=TEST_USER_ID,
        email="student@college.edu",
        username="CoolStudent123",
        role="authenticated",
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: TokenUser) -> str:
    """Create auth token for test user."""
    return str(auth_provider.create_token(test_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def realtime() -> InProcessRealtimeProvider:
    return InProcessRealtimeProvider()


@pytest.fixture
def assistant() -> ScriptedAssistant:
    return ScriptedAssistant()


@pytest.fixture
def identity_requests() -> list[httpx.Request]:
    """Requests seen by the fake identity service."""
    return []


@pytest.fixture
def identity_transport(
    identity_requests: list[httpx.Request], test_user: TokenUser, auth_token: str
) -> httpx.MockTransport:
    """Fake Supabase Auth: accepts any signup, one password for sign-in."""

    def handler(request: httpx.Request) -> httpx.Response:
        identity_requests.append(request)
        user = {
            "id": str(test_user.id),
            "email": test_user.email,
            "user_metadata": {"username": test_user.username},
        }
        session = {
            "access_token": auth_token,
            "refresh_token": "refresh-123",
            "expires_in": 3600,
            "user": user,
        }
        path = request.url.path
        if path.endswith("/signup"):
            return httpx.Response(200, json=session)
        if path.endswith("/token"):
            if json.loads(request.content).get("password") == "hunter22":
                return httpx.Response(200, json=session)
            return httpx.Response(
                400,
                json={"error": "invalid_grant", "error_description": "Invalid login credentials"},
            )
        if path.endswith("/logout"):
            return httpx.Response(204)
        return httpx.Response(404, json={"msg": "Not found"})

    return httpx.MockTransport(handler)


@pytest.fixture
async def seeded_profile(
    session_factory: async_sessionmaker[AsyncSession], test_user: TokenUser
) -> ProfileModel:
    """Profile row for the test user."""
    async with session_factory() as session:
        profile = ProfileModel(id=test_user.id, username=test_user.username)
        session.add(profile)
        await session.commit()
        return profile


@pytest.fixture
async def threads(
    session_factory: async_sessionmaker[AsyncSession],
) -> dict[str, ThreadModel]:
    """Two threads, inserted out of title order."""
    async with session_factory() as session:
        events = ThreadModel(title="Events")
        academics = ThreadModel(title="Academics")
        session.add_all([events, academics])
        await session.commit()
        return {"Events": events, "Academics": academics}


@pytest.fixture
async def seeded_posts(
    session_factory: async_sessionmaker[AsyncSession],
    seeded_profile: ProfileModel,
    threads: dict[str, ThreadModel],
) -> list[PostModel]:
    """Three posts with distinct timestamps, oldest first."""
    base = datetime(2026, 3, 1, 9, 0, 0)
    rows = [
        PostModel(
            author_id=seeded_profile.id,
            thread_id=threads["Academics"].id,
            content="Calc midterm study group?",
            created_at=base,
        ),
        PostModel(
            author_id=seeded_profile.id,
            thread_id=threads["Events"].id,
            content="Open mic tonight at the union",
            created_at=base + timedelta(hours=1),
        ),
        PostModel(
            author_id=seeded_profile.id,
            thread_id=threads["Academics"].id,
            content="Office hours moved to Thursday",
            created_at=base + timedelta(hours=2),
        ),
    ]
    async with session_factory() as session:
        session.add_all(rows)
        await session.commit()
    return rows


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def authenticated_client(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    seeded_profile: ProfileModel,
    auth_provider: JWTAuthProvider,
    auth_headers: dict[str, str],
    realtime: InProcessRealtimeProvider,
    assistant: ScriptedAssistant,
    identity_transport: httpx.MockTransport,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create authenticated test client with proper database and auth overrides.

    This client:
    - Uses an in-memory SQLite database holding the test user's profile
    - Sends a token signed by the test auth provider
    - Routes realtime through an in-process provider
    - Talks to a scripted assistant and a mocked identity service
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import (
        get_auth_service,
        get_chat_service,
        get_feed_service,
        get_profile_service,
    )
    from domain.services.auth_service import AuthService
    from domain.services.chat_service import ChatService
    from domain.services.feed_service import FeedService
    from domain.services.profile_service import ProfileService
    from infrastructure.auth.supabase_identity import SupabaseIdentityClient
    from main import create_app

    app = create_app()

    profile_service = ProfileService(uow_factory)
    chat_service = ChatService(assistant)
    feed_service = FeedService(uow_factory, realtime=realtime)
    auth_service = AuthService(
        SupabaseIdentityClient(
            auth_url=TEST_AUTH_URL, api_key="anon-key", transport=identity_transport
        ),
        profiles=profile_service,
        chats=chat_service,
    )

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_profile_service] = lambda: profile_service
    app.dependency_overrides[get_chat_service] = lambda: chat_service
    app.dependency_overrides[get_feed_service] = lambda: feed_service
    app.dependency_overrides[get_auth_service] = lambda: auth_service

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers=auth_headers
    ) as c:
        yield c

    app.dependency_overrides.clear()
