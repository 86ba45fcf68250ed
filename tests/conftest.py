import pytest
from datetime import datetime, timezone
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.main import app
from app.database.session import get_db_session
from app.models.base import Base
from app.models.user import User
from app.core.security import hash_password
from app.utils.websocket_manager import WebsocketManager

DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeWebSocket:
    """Records what the server sends; optionally fails every send."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.accepted = False
        self.sent = []

    async def accept(self):
        self.accepted = True

    async def send_text(self, message: str):
        if self.fail:
            raise RuntimeError("connection reset")
        self.sent.append(message)


@pytest.fixture
async def async_session():
    engine = create_async_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async_session_factory = sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    async with async_session_factory() as session:
        yield session
    await engine.dispose()

@pytest.fixture
async def test_user(async_session):
    user = User(
        username="testuser",
        hashed_password=hash_password("password123"),
        date_joined=datetime(2024, 12, 3, tzinfo=timezone.utc),
    )
    async_session.add(user)
    await async_session.commit()
    await async_session.refresh(user)
    return user

@pytest.fixture
def websocket_manager():
    manager = WebsocketManager()
    app.state.websocket_manager = manager
    yield manager
    del app.state.websocket_manager

@pytest.fixture
def override_get_db_session(async_session):
    async def _override():
        yield async_session
    app.dependency_overrides[get_db_session] = _override
    yield
    app.dependency_overrides.clear()

@pytest.fixture
async def async_test_client(override_get_db_session, websocket_manager):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

@pytest.fixture
def make_websocket():
    return FakeWebSocket
