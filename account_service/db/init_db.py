import logging
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import SQLModel
from account_service.db.session import engine
# Import all models to ensure they are registered
from account_service.models.user import Account, Admin, Superadmin, NormalUser  # noqa: F401

logger = logging.getLogger(__name__)

async def init_db(bind: AsyncEngine = engine) -> None:
    """Create the account and role profile tables if they do not exist."""
    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Ensured tables: %s", ", ".join(sorted(SQLModel.metadata.tables)))
