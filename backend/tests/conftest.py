import sys
import os
import pytest
from typing import AsyncGenerator

# Add the backend directory to the Python path
# This is necessary for pytest to find the 'main' module and other packages
backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)

from httpx import AsyncClient, ASGITransport

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from main import app
from core.database import Base, db_manager, enable_sqlite_foreign_keys
from core.config import settings
from core.utils.auth.jwt_auth import JWTManager
from core.utils.encryption import PasswordManager
from models.user import User, UserRole, UserStatus
from services.auth import principal_for

# Every test gets its own in-memory database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ADMIN_PASSWORD = "admin-secret"
MEMBER_PASSWORD = "member-secret"


@pytest.fixture
async def db_engine():
    """Fresh schema per test, wired into the global database manager."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    enable_sqlite_foreign_keys(engine)
    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    db_manager.set_engine_and_session_factory(engine, session_factory)
    yield engine

    db_manager.set_engine_and_session_factory(None, None)
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    async with db_manager.session_factory() as session:
        yield session


def _client(cookies: dict = None) -> AsyncClient:
    return AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        cookies=cookies,
    )


def session_cookie_for(user: User) -> dict:
    token = JWTManager().create_session_token(principal_for(user).to_claims())
    return {settings.SESSION_COOKIE_NAME: token}


@pytest.fixture
async def client(db_engine) -> AsyncGenerator[AsyncClient, None]:
    """Anonymous client"""
    async with _client() as ac:
        yield ac


async def _create_user(db_session: AsyncSession, email: str, password: str, role: str, name: str) -> User:
    user = User(
        name=name,
        email=email,
        hashed_password=PasswordManager.hash_password(password),
        role=role,
        status=UserStatus.ACTIVE,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "admin@example.com", ADMIN_PASSWORD, UserRole.ADMIN, "Admin")


@pytest.fixture
async def member_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "member@example.com", MEMBER_PASSWORD, UserRole.USER, "Maria Souza")


@pytest.fixture
async def admin_client(admin_user: User) -> AsyncGenerator[AsyncClient, None]:
    async with _client(session_cookie_for(admin_user)) as ac:
        yield ac


@pytest.fixture
async def member_client(member_user: User) -> AsyncGenerator[AsyncClient, None]:
    async with _client(session_cookie_for(member_user)) as ac:
        yield ac
