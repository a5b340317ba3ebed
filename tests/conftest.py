"""Shared test fixtures.

Each test gets its own database: a fresh SQLite file (aiosqlite) under the
test's tmp_path, or the database named by TEST_DATABASE_URL when set.
The FastAPI app is driven in-process through httpx's ASGITransport with
get_db overridden to point at that database.
"""

import os
from collections.abc import AsyncGenerator, Callable, Iterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from account_service.core.config import settings
from account_service.models.base import Base

# Lowest cost bcrypt accepts; keeps hashing fast in tests
_TEST_BCRYPT_ROUNDS = 4

TEST_PASSWORD = "password123"  # nosec B105


def _enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """Let SQLAlchemy, not the driver, emit BEGIN so SAVEPOINT works.

    The sqlite3 module otherwise manages transactions itself and breaks
    begin_nested().
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, _connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn) -> None:
        conn.exec_driver_sql("BEGIN")


@pytest.fixture(autouse=True)
def fast_bcrypt() -> Iterator[None]:
    """Lower bcrypt cost for the duration of each test."""
    original = settings.bcrypt_rounds
    settings.bcrypt_rounds = _TEST_BCRYPT_ROUNDS
    yield
    settings.bcrypt_rounds = original


@pytest_asyncio.fixture(scope="function")
async def db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine with all tables."""
    url = os.environ.get("TEST_DATABASE_URL") or (
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    )
    engine = create_async_engine(url, echo=False)
    if engine.dialect.name == "sqlite":
        _enable_sqlite_savepoints(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database."""
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for API tests.

    get_db is overridden with the same commit/rollback contract as the
    real dependency, against the test database.

    Yields:
        AsyncClient bound to the application via ASGI transport.
    """
    from account_service.core.database import get_db
    from account_service.main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def register(client: AsyncClient) -> Callable:
    """Register an account through the API and return (user dict, token).

    Usage:
        user, token = await register("jane@example.com")
    """

    async def _register(
        email: str = "john@example.com",
        *,
        name: str = "John Doe",
        password: str = TEST_PASSWORD,
    ) -> tuple[dict, str]:
        response = await client.post(
            "/api/auth/register",
            json={
                "name": name,
                "email": email,
                "password": password,
                "password_confirmation": password,
            },
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return data["user"], data["token"]

    return _register


def bearer(token: str) -> dict[str, str]:
    """Authorization header for a bearer token."""
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers() -> Callable[[str], dict[str, str]]:
    """Build Authorization headers from a plaintext token."""
    return bearer
