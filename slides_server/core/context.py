"""Per application state shared by request handlers.

Built once by ``register_app`` and stored on ``app.state.context``; handlers
receive it through the ``CurrentContext`` dependency instead of importing
module level singletons.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Type

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from slides_server.app.mcp.session import SessionRegistry
from slides_server.app.slides.llm.factory import AIProviderFactory
from slides_server.common.security.encryption import EncryptionManager
from slides_server.core.conf import settings
from slides_server.database.db import create_async_engine_and_session


@dataclass
class AppContext:
    engine: AsyncEngine
    db_session: async_sessionmaker[AsyncSession]
    uploads_dir: Path
    encryption: EncryptionManager
    sessions: SessionRegistry = field(default_factory=SessionRegistry)
    providers: Type[AIProviderFactory] = AIProviderFactory

    @classmethod
    def create(
        cls,
        *,
        database_url: str | None = None,
        uploads_dir: Path | None = None,
        encryption_key: str | None = None,
    ) -> 'AppContext':
        """
        Build a context from settings, any argument overrides its setting

        :param database_url: SQLAlchemy database url
        :param uploads_dir: Directory uploaded media is stored in
        :param encryption_key: Secret the API key encryption key is derived from
        :return:
        """
        engine, db_session = create_async_engine_and_session(database_url or settings.DATABASE_URL)
        return cls(
            engine=engine,
            db_session=db_session,
            uploads_dir=uploads_dir or settings.UPLOADS_DIR,
            encryption=EncryptionManager(encryption_key or settings.SLIDES_ENCRYPTION_KEY),
            sessions=SessionRegistry(maxsize=settings.MCP_QUEUE_MAXSIZE),
        )


def get_context(request: Request) -> AppContext:
    return request.app.state.context


# Context Annotated
CurrentContext = Annotated[AppContext, Depends(get_context)]
