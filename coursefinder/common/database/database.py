# coursefinder/common/database/database.py

import logging
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from coursefinder.common.config import settings
from coursefinder.models.models import Base

logger = logging.getLogger(__name__)

engine = create_async_engine(settings.DATABASE_URL, echo=False, pool_pre_ping=True)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields a session and closes it once the request is done.
    """
    async with async_session() as session:
        yield session

async def ping_database(session: AsyncSession) -> bool:
    try:
        await session.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error("Database ping failed: %s", e)
        return False

async def connect_to_db() -> None:
    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
        # Migrations own the schema in production
        if settings.APP_ENV != "production":
            await conn.run_sync(Base.metadata.create_all)
    logger.info("Database connection established")

async def close_db_connection() -> None:
    await engine.dispose()
    logger.info("Database connection closed")
