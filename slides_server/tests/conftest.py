from typing import AsyncGenerator

import pytest
import pytest_asyncio

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from slides_server.app.slides.service.seed import seed_defaults
from slides_server.core.context import AppContext
from slides_server.core.registrar import register_app
from slides_server.database.db import create_tables

TEST_ENCRYPTION_KEY = 'unit-test-encryption-key'


@pytest_asyncio.fixture
async def context(tmp_path) -> AsyncGenerator[AppContext, None]:
    """Application context on a private in-memory database with seeded defaults."""
    context = AppContext.create(
        database_url='sqlite+aiosqlite://',
        uploads_dir=tmp_path / 'uploads',
        encryption_key=TEST_ENCRYPTION_KEY,
    )
    await create_tables(context.engine)
    async with context.db_session() as session:
        await seed_defaults(session)
    yield context
    await context.sessions.close_all()
    await context.engine.dispose()


@pytest_asyncio.fixture
async def db(context: AppContext) -> AsyncGenerator[AsyncSession, None]:
    async with context.db_session() as session:
        yield session


@pytest.fixture
def app(context: AppContext) -> FastAPI:
    return register_app(context)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client talking to the app in process, lifespan is not run."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url='http://test') as c:
        yield c
