from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from slides_server import __version__
from slides_server.app.router import router
from slides_server.app.slides.service.seed import seed_defaults
from slides_server.common.exception.exception_handler import register_exception
from slides_server.common.log import log, setup_logging
from slides_server.core.conf import settings
from slides_server.core.context import AppContext
from slides_server.database.db import create_tables

health_router = APIRouter()


@health_router.get('/health', summary='Liveness probe', tags=['Health'])
async def health_check() -> dict[str, str]:
    return {'status': 'ok'}


@asynccontextmanager
async def register_init(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup and shutdown of the application

    :param app: FastAPI application
    :return:
    """
    context: AppContext = app.state.context

    context.uploads_dir.mkdir(parents=True, exist_ok=True)
    await create_tables(context.engine)
    async with context.db_session() as db:
        await seed_defaults(db)
    log.info(f'Slides server v{__version__} ready, uploads in {context.uploads_dir}')

    yield

    await context.sessions.close_all()
    await context.engine.dispose()
    log.info('Slides server stopped')


def register_app(context: AppContext | None = None) -> FastAPI:
    """
    Build the FastAPI application

    :param context: Application context, built from settings when omitted
    :return:
    """
    setup_logging()

    app = FastAPI(
        title=settings.FASTAPI_TITLE,
        version=__version__,
        description=settings.FASTAPI_DESCRIPTION,
        docs_url=settings.FASTAPI_DOCS_URL,
        redoc_url=settings.FASTAPI_REDOC_URL,
        openapi_url=settings.FASTAPI_OPENAPI_URL,
        lifespan=register_init,
    )
    app.state.context = context or AppContext.create()

    register_middleware(app)
    register_router(app)
    register_exception(app)

    return app


def register_middleware(app: FastAPI) -> None:
    if settings.MIDDLEWARE_CORS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ALLOWED_ORIGINS,
            allow_credentials=False,
            allow_methods=['*'],
            allow_headers=['*'],
            expose_headers=settings.CORS_EXPOSE_HEADERS,
        )


def register_router(app: FastAPI) -> None:
    app.include_router(router)
    app.include_router(health_router)
