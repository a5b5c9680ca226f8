from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker

from freelanceflow.core.config import settings
from freelanceflow.helpers.getters import isDebugMode
import logging

logger = logging.getLogger(__name__)

if isDebugMode():
    logger.info("Using database URL for debug mode")
else:
    logger.info("Using database URL for production mode")

engine = create_async_engine(settings.DATABASE_URL, future=True, echo=settings.DATABASE_ECHO)
SessionAsync = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables():
    """Create any missing tables."""
    from freelanceflow.db.base import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
