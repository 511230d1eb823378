import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.core import models
from app.core.database import Base, get_db

# Private in-memory db per test, StaticPool keeps the single connection alive
TEST_DATABASE_URL = "sqlite+aiosqlite://"


# Build the schema for a test and throw it away afterwards
@pytest_asyncio.fixture(scope="function")
async def test_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine):
    TestingSessionLocal = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with TestingSessionLocal() as session:
        yield session


# Client
@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession):
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


def make_record(record_id, dataset_name, name, age, department):
    return models.DatasetRecord(
        id=record_id,
        dataset_name=dataset_name,
        name=name,
        age=age,
        department=department,
    )


# Alice and Bob in "TestDS", inserted in that order
@pytest_asyncio.fixture(scope="function")
async def test_dataset(db_session: AsyncSession):
    records = [
        make_record(1, "TestDS", "Alice", 25, "Engineering"),
        make_record(2, "TestDS", "Bob", 30, "Engineering"),
    ]
    for record in records:
        db_session.add(record)
        await db_session.commit()
    return records


# Four people over two departments, ids not in insertion order
@pytest_asyncio.fixture(scope="function")
async def staff_dataset(db_session: AsyncSession):
    records = [
        make_record(13, "Staff", "Charlie", 35, "HR"),
        make_record(11, "Staff", "Alice", 25, "Engineering"),
        make_record(14, "Staff", "David", 40, "Sales"),
        make_record(12, "Staff", "Bob", 30, "Engineering"),
    ]
    for record in records:
        db_session.add(record)
        await db_session.commit()
    return records
