from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase
from app.core.config import settings

engine = create_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

# Keep loaded records usable after commit, the endpoints serialize them afterwards
AsyncSessionLocal = async_sessionmaker(
    bind=engine, class_=AsyncSession, expire_on_commit=False
)


# One session per request
async def get_db():
    async with AsyncSessionLocal() as session:
        yield session


# Every model registered on Base is created by migrations and by the test fixtures
class Base(DeclarativeBase):
    pass
