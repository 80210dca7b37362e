"""
Test infrastructure for the blog application.

Strategy
--------
- SQLite in-memory via aiosqlite eliminates the need for a running Postgres
  instance in CI, keeping the suite fast and self-contained.
- StaticPool forces all async tasks to share the same in-memory database
  connection, which is required because SQLite in-memory databases are
  connection-scoped; a new connection would see an empty database.
- The app's get_db dependency is overridden so every test-time request uses
  the test session factory rather than the production one.
- All tables are created fresh before each test and dropped after, and the
  application's session store is replaced, giving each test a clean state.
- Argon2 cost factors are turned down through the environment before the
  application is imported; hashing still goes through the real library.
"""
import os

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("PASSWORD_HASH_TIME_COST", "1")
os.environ.setdefault("PASSWORD_HASH_MEMORY_COST", "8192")
os.environ.setdefault("PASSWORD_HASH_PARALLELISM", "1")

import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from blog.config import settings  # noqa: E402
from blog.database import Base, get_db  # noqa: E402
from blog.main import app  # noqa: E402
from blog.sessions import SessionStore  # noqa: E402

TEST_EMAIL = "writer@example.com"
TEST_PASSWORD = "correct-horse-battery"

# ---------------------------------------------------------------------------
# Test database engine — SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ---------------------------------------------------------------------------
# Dependency override — replace production get_db with the test session factory
# ---------------------------------------------------------------------------

async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(autouse=True)
async def session_store() -> SessionStore:
    """Fresh login-session store per test."""
    store = SessionStore(ttl_seconds=settings.SESSION_TTL_SECONDS)
    app.state.session_store = store
    yield store


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """
    Yield a live AsyncSession for tests that need to interact with the
    database directly (e.g. seeding data, asserting ORM state).
    """
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    """
    Yield an httpx.AsyncClient wired to the app via ASGITransport, with no
    session cookie. Redirects are not followed so tests can assert on them.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def auth_client(async_client: AsyncClient) -> AsyncClient:
    """
    The same client after registering ``TEST_EMAIL`` and logging in through
    the login form; the session cookie lives in the client's cookie jar.
    """
    resp = await async_client.post("/user", json={"email": TEST_EMAIL, "password": TEST_PASSWORD})
    assert resp.status_code == 201
    resp = await async_client.post("/login", data={"email": TEST_EMAIL, "password": TEST_PASSWORD})
    assert resp.status_code == 303
    assert settings.SESSION_COOKIE_NAME in async_client.cookies
    return async_client
