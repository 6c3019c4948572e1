"""Pytest configuration and fixtures for helpdesk tests."""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["APP_SECRET_KEY"] = "test-secret-key"
os.environ["APP_ENV"] = "staging"
os.environ["APP_LOG_LEVEL"] = "WARNING"

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from helpdesk.database import enable_sqlite_foreign_keys, get_db
from helpdesk.main import app
from helpdesk.models import Base, Role, User
from helpdesk.utils.security import create_access_token, hash_password

TEST_BASE_URL = "http://testserver"
DEFAULT_PASSWORD = "secret123"


@pytest_asyncio.fixture
async def db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a database session for testing."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def app_db(session_factory):
    """Point the app's ``get_db`` dependency at the test database."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app_db):
    """HTTP client bound to the app in-process."""
    transport = httpx.ASGITransport(app=app_db)
    async with httpx.AsyncClient(transport=transport, base_url=TEST_BASE_URL) as http:
        yield http


@pytest.fixture
def make_user(session_factory):
    """Factory that stores a user and returns it."""

    async def _make_user(
        email: str = "user@example.com",
        role: Role = Role.CLIENT,
        name: str = "Test User",
        password: str = DEFAULT_PASSWORD,
        is_active: bool = True,
    ) -> User:
        async with session_factory() as session:
            user = User(
                email=email,
                password_hash=hash_password(password),
                name=name,
                role=role.value,
                is_active=is_active,
            )
            session.add(user)
            await session.commit()
            await session.refresh(user)
            return user

    return _make_user


@pytest_asyncio.fixture
async def client_user(make_user):
    return await make_user(email="client@example.com", role=Role.CLIENT, name="Client User")


@pytest_asyncio.fixture
async def admin_user(make_user):
    return await make_user(email="admin@example.com", role=Role.ADMIN, name="Admin User")


def token_for(user: User) -> str:
    return create_access_token(user_id=user.id, role=user.role, session_timeout_minutes=60)


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_for(user)}"}
