"""
Back Office Ledger - Test Configuration

Pytest fixtures and configuration.
"""

from datetime import datetime
from typing import AsyncGenerator, Dict

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.database import Base, get_async_session
from app.models.client import Client, ClientType
from app.models.influencer import Collaboration, Influencer
from app.models.staff import Staff, StaffType, WorkItem
from app.utils.security import create_access_token
from main import app


# In-memory SQLite shared by every connection of one engine
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed clock for date-sensitive tests
NOW = datetime(2026, 10, 19, 9, 0, 0)


@pytest_asyncio.fixture(scope="function")
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh schema for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # SQLite only enforces ON DELETE rules with this pragma
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    session_maker = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with database session override."""

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    """Bearer token header for an administrator."""
    token = create_access_token({"sub": "admin"})
    return {"Authorization": f"Bearer {token}"}


# ===========================================
# DATA FIXTURES
# ===========================================

@pytest_asyncio.fixture
async def test_client_record(db_session: AsyncSession) -> Client:
    """Create an active client with a balanced account."""
    record = Client(
        name="Himalayan Traders",
        email="accounts@himalayan-traders.com",
        contract_start_date=datetime(2026, 1, 1),
        contract_duration_days=365,
        type=ClientType.ACTIVE,
        locked_amount_nrs=10000,
        advance_amount_nrs=4000,
        due_amount_nrs=6000,
    )
    db_session.add(record)
    await db_session.commit()
    return record


@pytest_asyncio.fixture
async def other_client_record(db_session: AsyncSession) -> Client:
    """Create a second active client."""
    record = Client(
        name="Everest Foods",
        email="finance@everestfoods.com",
        contract_start_date=datetime(2026, 3, 1),
        contract_duration_days=180,
        type=ClientType.ACTIVE,
    )
    db_session.add(record)
    await db_session.commit()
    return record


@pytest_asyncio.fixture
async def work_basis_staff(db_session: AsyncSession) -> Staff:
    """Create a staff member paid per unit of work."""
    staff = Staff(name="Ram Thapa", type=StaffType.WORK_BASIS)
    db_session.add(staff)
    await db_session.commit()
    return staff


@pytest_asyncio.fixture
async def monthly_staff(db_session: AsyncSession) -> Staff:
    """Create a salaried staff member."""
    staff = Staff(name="Sita Sharma", type=StaffType.MONTHLY, monthly_salary_nrs=60000)
    db_session.add(staff)
    await db_session.commit()
    return staff


@pytest_asyncio.fixture
async def test_work_item(db_session: AsyncSession) -> WorkItem:
    """Create a work item with a default rate."""
    item = WorkItem(title="Poster design", rate_nrs=500)
    db_session.add(item)
    await db_session.commit()
    return item


@pytest_asyncio.fixture
async def test_influencer(db_session: AsyncSession) -> Influencer:
    """Create an influencer without social handles."""
    influencer = Influencer(name="Asha Gurung", email="asha@gurung-media.com")
    db_session.add(influencer)
    await db_session.commit()
    return influencer


@pytest_asyncio.fixture
async def test_collaboration(db_session: AsyncSession, test_influencer: Influencer) -> Collaboration:
    """Create a campaign for the test influencer."""
    collaboration = Collaboration(
        influencer_id=test_influencer.id,
        campaign_name="Dashain Launch",
        deliverables="3 reels",
        agreed_amount_nrs=45000,
        start_date=datetime(2026, 10, 1),
        end_date=datetime(2026, 10, 31),
    )
    db_session.add(collaboration)
    await db_session.commit()
    return collaboration
