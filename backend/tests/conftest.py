"""
NoteKeep Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (in-memory DB, users, tokens, API client).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh per test):
    ├── engine / session_factory: In-memory SQLite (aiosqlite) with all tables
    ├── db_session: A session for store-level tests
    ├── create_user: Inserts a committed user
    ├── mock_db_session: AsyncMock session for pure unit tests
    ├── frozen_clock: Deterministic, strictly increasing note timestamps
    └── test_client: HTTPX AsyncClient with get_db_session overridden
"""

import os

# Override settings for testing BEFORE any notekeep import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-for-notekeep-suite-0123456789abcdef"
os.environ["JWT_EXPIRE_MINUTES"] = "15"
os.environ["BCRYPT_ROUNDS"] = "4"  # Minimum cost keeps hashing fast
os.environ["LOG_LEVEL"] = "WARNING"

import uuid  # noqa: E402
from datetime import datetime, timedelta, timezone  # noqa: E402
from types import SimpleNamespace  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from notekeep.database import Base, get_db_session  # noqa: E402
from notekeep.models.note import Note  # noqa: E402,F401
from notekeep.models.user import User  # noqa: E402
from notekeep.schemas.auth import Identity  # noqa: E402
from notekeep.services.security import create_access_token, hash_password  # noqa: E402

DEFAULT_PASSWORD = "correct-horse-battery"


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def engine():
    """
    In-memory SQLite engine with the full schema.

    StaticPool keeps one connection, so every session in a test sees the
    same in-memory database.
    """
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def create_user(session_factory):
    """
    Factory fixture: `user = await create_user("alice@example.com")`.
    The user is committed, so other sessions (and the API) can see it.
    """
    async def _create(
        email: str = "alice@example.com",
        display_name: str = "Alice",
        password: str = DEFAULT_PASSWORD,
    ) -> User:
        async with session_factory() as session:
            user = User(
                email=email,
                display_name=display_name,
                password_hash=hash_password(password),
            )
            session.add(user)
            await session.commit()
            return user

    return _create


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session for unit tests that must not
    touch any database.
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.add = MagicMock()
    return session


@pytest.fixture
def frozen_clock(monkeypatch):
    """
    Makes note timestamps strictly increasing (one second apart), so
    "newest first" ordering is deterministic.
    """
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    ticks = iter(range(1, 100_000))

    def _tick():
        return base + timedelta(seconds=next(ticks))

    monkeypatch.setattr("notekeep.services.note_store._utcnow", _tick)
    return base


# ══════════════════════════════════════════════════════════════════════════
# Identity Helpers
# ══════════════════════════════════════════════════════════════════════════

def identity_for(user) -> Identity:
    return Identity(user_id=user.id, email=user.email, display_name=user.display_name)


def auth_headers(user_or_id) -> dict:
    user_id = getattr(user_or_id, "id", user_or_id)
    token, _ = create_access_token(user_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_identity():
    return Identity(user_id=uuid.uuid4(), email="owner@example.com", display_name="Owner")


@pytest.fixture
def sample_note(sample_identity):
    """An object shaped like a Note row, owned by `sample_identity`."""
    now = datetime.now(timezone.utc)
    return SimpleNamespace(
        id=uuid.uuid4(),
        owner_id=sample_identity.user_id,
        title="Shopping",
        content="milk, eggs",
        created_at=now,
        updated_at=now,
    )


# ══════════════════════════════════════════════════════════════════════════
# API Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport,
    with request sessions drawn from the in-memory test database.
    """
    from notekeep.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
