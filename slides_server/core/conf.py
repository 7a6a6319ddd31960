from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from slides_server.core.path_conf import BASE_PATH, UPLOAD_DIR


class Settings(BaseSettings):
    """Global settings"""

    model_config = SettingsConfigDict(
        env_file=f'{BASE_PATH}/.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=True,
    )

    # .env current environment
    ENVIRONMENT: Literal['dev', 'prod'] = 'dev'

    # FastAPI
    FASTAPI_API_PATH: str = '/api'
    FASTAPI_MCP_PATH: str = '/mcp'
    FASTAPI_TITLE: str = 'Slides'
    FASTAPI_DESCRIPTION: str = 'Local presentation authoring backend'
    FASTAPI_DOCS_URL: str | None = '/docs'
    FASTAPI_REDOC_URL: str | None = '/redoc'
    FASTAPI_OPENAPI_URL: str | None = '/openapi'

    # Server
    SERVER_HOST: str = '127.0.0.1'
    SERVER_PORT: int = 3332

    # .env Database
    DATABASE_URL: str = 'sqlite+aiosqlite:///slides.db'

    # Database
    DATABASE_ECHO: bool = False

    # .env Uploads
    UPLOADS_DIR: Path = UPLOAD_DIR

    # Uploads
    UPLOAD_ALLOWED_MIME_PREFIXES: tuple[str, ...] = ('image/', 'video/', 'audio/')
    UPLOAD_CACHE_CONTROL: str = 'public, max-age=31536000'
    UPLOAD_URL_PREFIX: str = '/api/uploads'

    # .env Encryption
    SLIDES_ENCRYPTION_KEY: str = 'slides-desktop-default-key-32b!'

    # Single local user that owns every record
    LOCAL_USER_ID: str = 'local'

    # MCP
    MCP_SERVER_NAME: str = 'slides'
    MCP_PROTOCOL_VERSION: str = '2024-11-05'
    MCP_QUEUE_MAXSIZE: int = 100
    MCP_HEARTBEAT_SECONDS: float = 30

    # AI providers
    AI_REQUEST_TIMEOUT_SECONDS: float = 60 * 5

    # CORS
    MIDDLEWARE_CORS: bool = True
    CORS_ALLOWED_ORIGINS: list[str] = ['*']
    CORS_EXPOSE_HEADERS: list[str] = ['*']

    # .env Log
    LOG_LEVEL: str = 'INFO'

    # Log
    LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    LOG_QUIET_LOGGERS: list[str] = ['httpx', 'httpcore', 'aiosqlite', 'openai', 'anthropic', 'google_genai']

    @model_validator(mode='before')
    @classmethod
    def check_env(cls, values: Any) -> Any:
        """Check environment variables"""
        if values.get('ENVIRONMENT') == 'prod':
            values['FASTAPI_OPENAPI_URL'] = None
            values['FASTAPI_DOCS_URL'] = None
            values['FASTAPI_REDOC_URL'] = None

        database_url = values.get('DATABASE_URL')
        if database_url:
            values['DATABASE_URL'] = normalize_database_url(database_url)

        return values


def normalize_database_url(url: str) -> str:
    """Turn sqlx style ``sqlite:path?mode=rwc`` urls into SQLAlchemy aiosqlite urls."""
    if url.startswith('sqlite+aiosqlite:'):
        return url
    if url.startswith('sqlite://'):
        return 'sqlite+aiosqlite://' + url[len('sqlite://') :]
    if url.startswith('sqlite:'):
        path = url[len('sqlite:') :].split('?', 1)[0]
        return f'sqlite+aiosqlite:///{path}'
    return url


@lru_cache
def get_settings() -> Settings:
    """Get the global settings singleton"""
    return Settings()


# Global settings instance
settings = get_settings()
