# app/core/database.py
import asyncio
import logging
import re
import sys

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
)
from sqlalchemy.orm import sessionmaker

from core.config import settings

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,      # only in dev
    future=True,
    pool_pre_ping=True,
)

AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def mask_url(url: str) -> str:
    """Hide the password part of a connection string."""
    return re.sub(r"(://[^:/@]+):[^@]*@", r"\1:****@", url)


async def ping(bind=None) -> None:
    async with (bind or engine).connect() as conn:
        await conn.execute(text("SELECT 1"))


async def connect_with_retry(
        bind=None,
        retries: int = None,
        backoff_seconds: int = None,
        production: bool = None,
) -> bool:
    """Check the database at startup.

    Tries ``retries`` times, sleeping ``attempt * backoff_seconds`` between
    attempts (2s then 4s with the defaults). Returns True when connected.
    When every attempt fails the process exits with status 1 in production;
    elsewhere it keeps running without a database and returns False.
    """
    retries = retries or settings.DB_CONNECT_RETRIES
    backoff_seconds = settings.DB_RETRY_BACKOFF_SECONDS if backoff_seconds is None else backoff_seconds
    production = settings.is_production if production is None else production

    logger.info(f"Connecting to database {mask_url(settings.DATABASE_URL)}")
    for attempt in range(1, retries + 1):
        try:
            await ping(bind)
            logger.info("Database connected")
            return True
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Connection attempt {attempt}/{retries} failed: {e}")
            if attempt < retries:
                wait = attempt * backoff_seconds
                logger.info(f"Retrying in {wait} seconds...")
                await asyncio.sleep(wait)

    logger.error(f"Failed to connect after {retries} attempts")
    if production:
        logger.critical("Database unreachable in production, exiting")
        sys.exit(1)

    logger.warning("Starting WITHOUT database connection, endpoints requiring the database will fail")
    return False


async def create_tables(bind=None) -> None:
    """Create any missing tables for the registered models."""
    from models import Base

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
