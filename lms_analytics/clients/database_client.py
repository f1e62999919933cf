# -*- coding: utf-8 -*-
"""
Async database client (SQLAlchemy 2.0 + asyncpg).
"""
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (AsyncSession, async_sessionmaker,
                                    create_async_engine)

from lms_analytics.config.logger import configure_logger
from lms_analytics.config.settings import settings
from lms_analytics.domain.models import Base

logger = configure_logger()

async_engine = create_async_engine(
    settings.database_url,
    echo=settings.sql_echo,
    pool_pre_ping=True,  # check the connection before handing it out
    pool_recycle=3600,
)

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine, class_=AsyncSession, expire_on_commit=False
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Provide an async database session for FastAPI dependency injection.

    Yields:
        AsyncSession: Active database session

    Raises:
        SQLAlchemyError: Connection or query errors
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def check_database_connection() -> bool:
    """Run ``SELECT 1`` against the configured database."""
    try:
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


async def init_db() -> None:
    """
    Create the tables for all mapped models.

    Only meant for local development and tests; production schemas are
    managed outside this service.
    """
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        Base.registry.configure()
