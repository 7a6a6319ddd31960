import logging

from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from slides_server.common.model import Base
from slides_server.core.conf import settings

logger = logging.getLogger(__name__)


def _is_memory_url(url: str) -> bool:
    return url.rstrip('/').endswith(('sqlite+aiosqlite:', ':memory:'))


def create_async_engine_and_session(
    url: str,
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """
    Create the async engine and session factory

    :param url: SQLAlchemy database url
    :return:
    """
    engine_kwargs = {'echo': settings.DATABASE_ECHO, 'future': True}
    if _is_memory_url(url):
        # One shared connection, otherwise every checkout sees an empty database
        engine_kwargs.update(poolclass=StaticPool, connect_args={'check_same_thread': False})

    try:
        engine = create_async_engine(url, **engine_kwargs)
    except Exception as e:
        logger.error(f'Database connection failed for {url}: {e}')
        raise

    db_session = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )
    return engine, db_session


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Session dependency bound to the application context"""
    async with request.app.state.context.db_session() as session:
        yield session


async def create_tables(engine: AsyncEngine) -> None:
    """Create database tables"""
    # Register every model on the metadata
    import slides_server.app.slides.model  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables(engine: AsyncEngine) -> None:
    """Drop database tables"""
    import slides_server.app.slides.model  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


# Session Annotated
CurrentSession = Annotated[AsyncSession, Depends(get_db)]
