import asyncio
import sys

from dataclasses import dataclass
from typing import Annotated

import cappa
import granian

from cappa.output import error_format
from rich.panel import Panel
from rich.prompt import Prompt
from rich.text import Text
from watchfiles import PythonFilter

from slides_server import __version__
from slides_server.app.slides.service.seed import seed_defaults
from slides_server.common.exception.errors import BaseExceptionError
from slides_server.core.conf import settings
from slides_server.core.context import AppContext
from slides_server.database.db import create_tables, drop_tables
from slides_server.utils.console import console

output_help = '\nFor more information, try "[cyan]--help[/]"'


class CustomReloadFilter(PythonFilter):
    """Custom reload filter"""

    def __init__(self) -> None:
        super().__init__(extra_extensions=['.json', '.yaml', '.yml'])


async def init(*, reset: bool) -> None:
    panel_content = Text()
    panel_content.append('Database configuration', style='bold green')
    panel_content.append('\n\n  • Url: ')
    panel_content.append(f'{settings.DATABASE_URL}', style='yellow')
    panel_content.append('\n\nUploads', style='bold green')
    panel_content.append('\n\n  • Directory: ')
    panel_content.append(f'{settings.UPLOADS_DIR}', style='yellow')

    console.print(Panel(panel_content, title=f'slides-server v{__version__} initialization', border_style='cyan', padding=(1, 2)))
    question = (
        'Are you sure to drop all tables and restore the built-in themes and layout rules?'
        if reset
        else 'Create missing tables and seed the built-in themes and layout rules?'
    )
    ok = Prompt.ask(question, choices=['y', 'n'], default='n')

    if ok.lower() != 'y':
        console.print('Initialization cancelled', style='yellow')
        return

    context = AppContext.create()
    console.print('Initializing...', style='white')
    try:
        if reset:
            console.print('Dropping database tables', style='white')
            await drop_tables(context.engine)
        console.print('Creating database tables', style='white')
        await create_tables(context.engine)
        console.print('Seeding built-in themes and layout rules', style='white')
        async with context.db_session() as db:
            await seed_defaults(db)
        console.print('Initialization completed', style='green')
        console.print('\nTry [bold cyan]slides-server run[/bold cyan] to start the service')
    except Exception as e:
        raise cappa.Exit(e.msg if isinstance(e, BaseExceptionError) else f'Initialization failed: {e}', code=1)
    finally:
        await context.engine.dispose()


def run(host: str, port: int, reload: bool, workers: int) -> None:  # noqa: FBT001
    url = f'http://{host}:{port}'

    panel_content = Text()
    panel_content.append('Python version:', style='bold cyan')
    panel_content.append(f'{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}', style='white')

    panel_content.append('\nAPI request address: ', style='bold cyan')
    panel_content.append(f'{url}{settings.FASTAPI_API_PATH}', style='blue')
    panel_content.append('\nMCP stream address: ', style='bold cyan')
    panel_content.append(f'{url}{settings.FASTAPI_MCP_PATH}/sse', style='blue')

    panel_content.append('\n\nEnvironment mode: ', style='bold green')
    env_style = 'yellow' if settings.ENVIRONMENT == 'dev' else 'green'
    panel_content.append(f'{settings.ENVIRONMENT.upper()}', style=env_style)
    panel_content.append('\nDatabase: ', style='bold green')
    panel_content.append(f'{settings.DATABASE_URL}', style='white')

    if settings.ENVIRONMENT == 'dev' and settings.FASTAPI_DOCS_URL:
        panel_content.append(f'\n\n📖 Swagger docs: {url}{settings.FASTAPI_DOCS_URL}', style='bold magenta')
        if settings.FASTAPI_REDOC_URL:
            panel_content.append(f'\n📚 Redoc docs: {url}{settings.FASTAPI_REDOC_URL}', style='bold magenta')

    console.print(Panel(panel_content, title=f'slides-server v{__version__}', border_style='purple', padding=(1, 2)))
    granian.Granian(
        target='slides_server.main:app',
        interface='asgi',
        address=host,
        port=port,
        reload=not reload,
        reload_filter=CustomReloadFilter,
        workers=workers,
    ).serve()


@cappa.command(help='Create the database tables and seed built-in data', default_long=True)
@dataclass
class Init:
    reset: Annotated[
        bool,
        cappa.Arg(default=False, help='Drop every table first, deleting all presentations, media records and settings'),
    ]

    async def __call__(self) -> None:
        await init(reset=self.reset)


@cappa.command(help='Run API service', default_long=True)
@dataclass
class Run:
    host: Annotated[
        str,
        cappa.Arg(
            default=settings.SERVER_HOST,
            help='Host IP address to serve on, use `0.0.0.0` to allow access from the local network',
        ),
    ]
    port: Annotated[
        int,
        cappa.Arg(default=settings.SERVER_PORT, help='Port number to serve on'),
    ]
    no_reload: Annotated[
        bool,
        cappa.Arg(default=False, help='Disable automatic reloading when code files change'),
    ]
    workers: Annotated[
        int,
        cappa.Arg(default=1, help='Number of worker processes, must be used together with `--no-reload`'),
    ]

    def __call__(self) -> None:
        run(host=self.host, port=self.port, reload=self.no_reload, workers=self.workers)


@cappa.command(help='A local presentation authoring backend', default_long=True)
@dataclass
class SlidesCli:
    subcmd: cappa.Subcommands[Init | Run | None] = None

    def __call__(self) -> None:
        if self.subcmd is None:
            run(host=settings.SERVER_HOST, port=settings.SERVER_PORT, reload=False, workers=1)


def main() -> None:
    output = cappa.Output(error_format=f'{error_format}\n{output_help}')
    asyncio.run(cappa.invoke_async(SlidesCli, version=__version__, output=output))
