"""
Pytest fixtures - test DB, client, accounts with profiles (TDD/BDD support).
Challenge: Isolated tests; no PostgreSQL, Redis, Elasticsearch or broker needed.
"""

import os

# Settings are cached on first import; switch off external services before that
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("SEARCH_INDEXING_ENABLED", "false")

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from nexar.core.security import create_access_token, hash_password
from nexar.db.base import Base
from nexar.db.models import Account, Listing, Profile, StorageBucket
from nexar.db.models.storage import DEFAULT_BUCKETS, IMAGE_MIME_TYPES
from nexar.db.session import get_db
from nexar.main import app
from nexar.services.provisioning import provision_profile

# In-memory SQLite shared by every connection of the engine
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # pysqlite defers BEGIN, which breaks SAVEPOINT; emit it ourselves
    @event.listens_for(engine.sync_engine, "connect")
    def _connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as s:
        for bucket_id, size_limit in DEFAULT_BUCKETS:
            s.add(
                StorageBucket(
                    id=bucket_id,
                    public=True,
                    file_size_limit=size_limit,
                    allowed_mime_types=list(IMAGE_MIME_TYPES),
                )
            )
        await s.flush()
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


@pytest.fixture
def make_account(session: AsyncSession):
    """Factory: account + provisioned profile. Returns (account, profile, auth headers)."""

    async def _make(email: str, *, admin: bool = False, with_profile: bool = True, **metadata):
        account = Account(
            email=email,
            hashed_password=hash_password("password123"),
            raw_metadata=metadata,
        )
        session.add(account)
        await session.flush()
        await session.refresh(account)
        profile = None
        if with_profile:
            profile = await provision_profile(session, account)
            if admin:
                profile.is_admin = True
                await session.flush()
        headers = {"Authorization": f"Bearer {create_access_token(account.id)}"}
        return account, profile, headers

    return _make


@pytest.fixture
def make_listing(session: AsyncSession):
    """Factory: listing owned by the given profile, defaults for everything else."""

    async def _make(seller: Profile, **fields) -> Listing:
        values = {
            "title": "Yamaha MT-07 2021",
            "brand": "Yamaha",
            "model": "MT-07",
            "category": "naked",
            "year": 2021,
            "mileage": 12000,
            "price": 6500,
            "location": "Cluj-Napoca",
            "images": [],
        }
        values.update(fields)
        listing = Listing(
            seller_id=seller.id,
            seller_name=seller.name,
            seller_type=seller.seller_type,
            **values,
        )
        session.add(listing)
        await session.flush()
        await session.refresh(listing)
        return listing

    return _make


@pytest_asyncio.fixture
async def seller(make_account):
    return await make_account("seller@example.com", name="Andrei Pop", location="Cluj-Napoca")


@pytest_asyncio.fixture
async def admin(make_account):
    return await make_account("admin@example.com", admin=True, name="Admin")
