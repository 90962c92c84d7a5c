from typing import AsyncIterator
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from account_service.core.config import settings

engine = create_async_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO, future=True)

# expire_on_commit=False: handlers read attributes after commit without an
# implicit (sync) refresh, which AsyncSession cannot do.
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

async def get_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields one session per request."""
    async with async_session() as session:
        yield session
