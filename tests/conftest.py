"""
Pytest fixtures - test DB, client, owners.
Each test gets a fresh in-memory SQLite database shared by the app through the get_db override.
"""

import os
from typing import AsyncGenerator

# Point the app's own engine at SQLite before listings_api is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from listings_api.db.base import Base  # noqa: E402
from listings_api.db.models import Listing, User  # noqa: E402,F401
from listings_api.db.session import get_db  # noqa: E402
from listings_api.main import app  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as s:
        yield s


@pytest_asyncio.fixture
async def client(session: AsyncSession):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


async def _make_user(session: AsyncSession, email: str, full_name: str) -> User:
    user = User(email=email, full_name=full_name)
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def owner(session: AsyncSession) -> User:
    return await _make_user(session, "seller@cheesemarket.com", "Cheese Seller")


@pytest_asyncio.fixture
async def other_owner(session: AsyncSession) -> User:
    return await _make_user(session, "rival@cheesemarket.com", "Rival Seller")


@pytest.fixture
def owner_iri(owner: User) -> str:
    return f"/api/v1/users/{owner.id}"
