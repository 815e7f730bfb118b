"""
Shopfront Backend: Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the test suite.
How:   Route tests run against a fresh in-memory SQLite database (aiosqlite,
       foreign keys enabled) that replaces `get_db_session` through
       `app.dependency_overrides`. Service tests use a mocked AsyncSession.

Fixture Hierarchy (all function-scoped):
    db_engine ──▶ session_factory ──┬──▶ users        (alice, bob with tokens)
                                    └──▶ test_client  (httpx AsyncClient)
    mock_db_session                  (AsyncMock session, no database)
    auth_headers                     (Authorization header builder)
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Settings are read at import time; configure them before importing `app`
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.gettempdir(), "shopfront_test.db"
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.database import Base, get_db_session  # noqa: E402
from app.main import create_app  # noqa: E402
from app.models import Favorite, Product, User  # noqa: E402

ALICE_TOKEN = "alice-token-0001"
BOB_TOKEN = "bob-token-0002"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    A private in-memory database per test.

    StaticPool keeps the single in-memory connection alive across sessions;
    without it every new connection would see an empty database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def users(session_factory):
    """Two users with known bearer tokens: alice and bob."""
    async with session_factory() as session:
        alice = User(email="alice@example.com", token=ALICE_TOKEN)
        bob = User(email="bob@example.com", token=BOB_TOKEN)
        session.add_all([alice, bob])
        await session.commit()
    return {"alice": alice, "bob": bob}


@pytest.fixture
def seed_product(session_factory):
    """
    Factory inserting a product directly, bypassing the API.

    Usage:
        product = await seed_product(owner=users["alice"], category="tools")
    """

    async def _seed(owner: User, category: str = "tools", **fields) -> Product:
        async with session_factory() as session:
            product = Product(owner_id=owner.id, category=category, **fields)
            session.add(product)
            await session.commit()
            return product

    return _seed


@pytest.fixture
def seed_favorite(session_factory):
    async def _seed(owner: User, product: Product) -> Favorite:
        async with session_factory() as session:
            favorite = Favorite(owner_id=owner.id, product_id=product.id)
            session.add(favorite)
            await session.commit()
            return favorite

    return _seed


# ══════════════════════════════════════════════════════════════════════════
# HTTP Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient routed straight into a fresh app instance.

    `raise_app_exceptions=False` lets the catch-all 500 handler's response
    reach the test instead of the re-raised exception.
    """
    app = create_app()

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers():
    """Builds an Authorization header: auth_headers(ALICE_TOKEN)."""

    def _headers(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def mock_db_session():
    """
    A mock async database session for service-level tests.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = product
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session
