"""Global test configuration and fixtures for the DEALD feedback service."""

import os

# Must be set before src settings are instantiated
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-key-for-testing-only")
os.environ["FORUM_API_KEY"] = ""

from collections.abc import AsyncGenerator
from typing import Callable

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from asgi_lifespan import LifespanManager
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from jose import jwt

from src.api.core.dependencies import get_feedback_notifier
from src.database.models import Base, User
from src.modules.feedback.notifications import FeedbackNotifier
from src.utils.settings.auth import AuthSettings

from tests.factories import FeedbackFactory, UserFactory

BASE_URL = "http://test-deald-feedback"


class RecordingMessageClient:
    """Stands in for PrivateMessageClient and keeps every message it is given."""

    def __init__(self):
        self.sent: list[dict[str, str]] = []

    async def send(self, title: str, body: str, recipient_username: str) -> None:
        self.sent.append(
            {"title": title, "body": body, "recipient": recipient_username}
        )


@pytest.fixture
def user_factory():
    return UserFactory


@pytest.fixture
def feedback_factory():
    return FeedbackFactory


@pytest_asyncio.fixture
async def async_engine():
    """A private in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine):
    return async_sessionmaker(bind=async_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def message_client() -> RecordingMessageClient:
    return RecordingMessageClient()


@pytest.fixture
def notifier(message_client: RecordingMessageClient) -> FeedbackNotifier:
    return FeedbackNotifier(client=message_client)


@pytest_asyncio.fixture
async def app(session_factory, notifier: FeedbackNotifier):
    """Create FastAPI application with lifespan manager for testing."""
    from src.main import app

    async with LifespanManager(app):
        app.state.session_factory = session_factory
        app.dependency_overrides[get_feedback_notifier] = lambda: notifier
        yield app
        app.dependency_overrides.clear()


# Test Data Fixtures
@pytest_asyncio.fixture
async def seller(db_session: AsyncSession, user_factory) -> User:
    return await user_factory.create_async(
        db_session, username="alice", name="Alice Seller"
    )


@pytest_asyncio.fixture
async def buyer(db_session: AsyncSession, user_factory) -> User:
    return await user_factory.create_async(
        db_session, username="bob", name="Bob Buyer"
    )


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession, user_factory) -> User:
    return await user_factory.create_async(
        db_session, username="carol", name="Carol Bystander"
    )


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession, user_factory) -> User:
    return await user_factory.create_async(
        db_session, username="moderator", name="Forum Admin", admin=True
    )


# JWT Token Fixtures
@pytest.fixture()
def jwt_token_factory() -> Callable[[User], str]:
    """Factory for creating forum session tokens for test users."""
    auth_settings = AuthSettings()

    def create_token(user: User) -> str:
        return jwt.encode(
            {"sub": str(user.id), "username": user.username},
            auth_settings.JWT_SECRET,
            algorithm=auth_settings.JWT_ALGORITHM,
        )

    return create_token


# HTTP Client Fixtures
@pytest_asyncio.fixture
async def public_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client without credentials (anonymous visitor)."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url=BASE_URL
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def client_factory(app: FastAPI, jwt_token_factory):
    """Factory for creating HTTP clients acting as a given user."""
    clients: list[AsyncClient] = []

    def create_client_for_user(user: User) -> AsyncClient:
        client = AsyncClient(
            transport=ASGITransport(app=app),
            base_url=BASE_URL,
            headers={"Authorization": f"Bearer {jwt_token_factory(user)}"},
        )
        clients.append(client)
        return client

    yield create_client_for_user

    for client in clients:
        await client.aclose()


@pytest.fixture
def buyer_client(client_factory, buyer: User) -> AsyncClient:
    return client_factory(buyer)


@pytest.fixture
def seller_client(client_factory, seller: User) -> AsyncClient:
    return client_factory(seller)


@pytest.fixture
def admin_client(client_factory, admin_user: User) -> AsyncClient:
    return client_factory(admin_user)
