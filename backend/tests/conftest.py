"""
PostBoard Backend - Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the whole suite.
How:   Every test gets a brand-new in-memory SQLite database (aiosqlite,
       StaticPool so all sessions share the one connection), with the tables
       created from Base.metadata.

Fixture Hierarchy (all function-scoped):
    db_engine ──► session_factory ──► db_session      (service tests)
                                 └──► test_client     (endpoint tests, with
                                                       get_db_session overridden)
    user_factory / post_factory / comment_factory      (insert rows via db_session)
"""

import os

# Override settings BEFORE any postboard import: Settings() is read once at import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"  # bcrypt minimum; keeps hashing fast
os.environ["DB_SYNC_SCHEMA"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from postboard.database import Base, enable_sqlite_foreign_keys, get_db_session
from postboard.models import Comment, Post, User, UserRole
from postboard.security import hash_password


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """Fresh in-memory database with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """
    A session for calling services directly.

    Usage:
        async def test_signup(db_session):
            user = await user_service.signup(db_session, SignupRequest(...))
    """
    async with session_factory() as session:
        yield session


# ══════════════════════════════════════════════════════════════════════════
# Row Factories
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def user_factory(db_session):
    """Insert a user directly (bypassing the service) and return the ORM row."""
    counter = {"n": 0}

    async def create(name="Ally", email=None, password="longenough", role=UserRole.user):
        counter["n"] += 1
        user = User(
            name=name,
            email=email or f"user{counter['n']}@mail.com",
            password=hash_password(password),
            role=role,
        )
        db_session.add(user)
        await db_session.flush()
        return user

    return create


@pytest.fixture
def post_factory(db_session):
    async def create(user, title="First post", content="Hello there"):
        post = Post(title=title, content=content, user_id=user.id)
        db_session.add(post)
        await db_session.flush()
        return post

    return create


@pytest.fixture
def comment_factory(db_session):
    async def create(user, post, content="Nice post"):
        comment = Comment(content=content, post_id=post.id, user_id=user.id)
        db_session.add(comment)
        await db_session.flush()
        return comment

    return create


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to a fresh app over ASGITransport.

    get_db_session is overridden so every request opens its own session on
    the test database, with the same commit/rollback behavior as production.
    raise_app_exceptions=False lets 500 responses come back as responses.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from postboard.main import create_app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
