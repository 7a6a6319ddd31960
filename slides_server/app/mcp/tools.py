"""Tools exposed over MCP.

Every tool runs against the same storage as the REST API, through the service
layer, with a database session of its own.
"""

import json

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from pydantic import BaseModel

from slides_server.app.mcp.protocol import InvalidParamsError
from slides_server.app.slides.schema.layout_rule import GetLayoutRuleDetail
from slides_server.app.slides.schema.media import GetMediaDetail
from slides_server.app.slides.schema.presentation import (
    CreatePresentationParam,
    GetPresentationDetail,
    UpdatePresentationParam,
)
from slides_server.app.slides.schema.theme import GetThemeDetail
from slides_server.app.slides.service.layout_rule_service import layout_rule_service
from slides_server.app.slides.service.media_service import media_service
from slides_server.app.slides.service.presentation_service import presentation_service
from slides_server.app.slides.service.theme_service import theme_service

if TYPE_CHECKING:
    from slides_server.core.context import AppContext

ToolHandler = Callable[['AppContext', dict[str, Any]], Awaitable[str]]


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    input_schema: dict[str, Any]
    handler: ToolHandler

    def describe(self) -> dict[str, Any]:
        return {'name': self.name, 'description': self.description, 'inputSchema': self.input_schema}


def _schema(properties: dict[str, str] | None = None, required: tuple[str, ...] = ()) -> dict[str, Any]:
    return {
        'type': 'object',
        'properties': {
            name: {'type': 'string', 'description': description} for name, description in (properties or {}).items()
        },
        'required': list(required),
    }


def require_str(arguments: dict[str, Any], field: str) -> str:
    value = arguments.get(field)
    if not isinstance(value, str):
        raise InvalidParamsError(f'Missing required argument: {field}')
    return value


def optional_str(arguments: dict[str, Any], field: str) -> str | None:
    value = arguments.get(field)
    if value is not None and not isinstance(value, str):
        raise InvalidParamsError(f'Invalid argument: {field} must be a string')
    return value


def _dump(value: BaseModel | list[BaseModel] | dict[str, Any]) -> str:
    if isinstance(value, BaseModel):
        data = value.model_dump(mode='json', by_alias=True)
    elif isinstance(value, list):
        data = [item.model_dump(mode='json', by_alias=True) for item in value]
    else:
        data = value
    return json.dumps(data, indent=2, ensure_ascii=False)


async def list_presentations(context: 'AppContext', arguments: dict[str, Any]) -> str:
    async with context.db_session() as db:
        presentations = await presentation_service.get_list(db=db)
        return _dump([GetPresentationDetail.model_validate(p) for p in presentations])


async def get_presentation(context: 'AppContext', arguments: dict[str, Any]) -> str:
    pk = require_str(arguments, 'id')
    async with context.db_session() as db:
        presentation = await presentation_service.get(db=db, pk=pk)
        return _dump(GetPresentationDetail.model_validate(presentation))


async def create_presentation(context: 'AppContext', arguments: dict[str, Any]) -> str:
    obj = CreatePresentationParam(
        title=require_str(arguments, 'title'),
        content=optional_str(arguments, 'content'),
        theme=optional_str(arguments, 'theme'),
    )
    async with context.db_session() as db:
        presentation = await presentation_service.create(db=db, obj=obj)
        return _dump(GetPresentationDetail.model_validate(presentation))


async def update_presentation(context: 'AppContext', arguments: dict[str, Any]) -> str:
    pk = require_str(arguments, 'id')
    obj = UpdatePresentationParam(
        title=optional_str(arguments, 'title'),
        content=optional_str(arguments, 'content'),
        theme=optional_str(arguments, 'theme'),
    )
    async with context.db_session() as db:
        presentation = await presentation_service.update(db=db, pk=pk, obj=obj)
        return _dump(GetPresentationDetail.model_validate(presentation))


async def delete_presentation(context: 'AppContext', arguments: dict[str, Any]) -> str:
    pk = require_str(arguments, 'id')
    async with context.db_session() as db:
        await presentation_service.delete(db=db, pk=pk)
    return f'Presentation {pk} deleted successfully.'


async def add_slides(context: 'AppContext', arguments: dict[str, Any]) -> str:
    pk = require_str(arguments, 'id')
    slides = require_str(arguments, 'slides')
    async with context.db_session() as db:
        presentation = await presentation_service.add_slides(db=db, pk=pk, slides=slides)
        return _dump(GetPresentationDetail.model_validate(presentation))


async def list_themes(context: 'AppContext', arguments: dict[str, Any]) -> str:
    async with context.db_session() as db:
        themes = await theme_service.get_list(db=db)
        return _dump([GetThemeDetail.model_validate(t) for t in themes])


async def list_layout_rules(context: 'AppContext', arguments: dict[str, Any]) -> str:
    async with context.db_session() as db:
        rules = await layout_rule_service.get_list(db=db)
        return _dump([GetLayoutRuleDetail.from_model(r) for r in rules])


async def match_layout(context: 'AppContext', arguments: dict[str, Any]) -> str:
    html = require_str(arguments, 'html')
    async with context.db_session() as db:
        result = await layout_rule_service.match_slide(db=db, html=html)
        return _dump(result)


async def list_media(context: 'AppContext', arguments: dict[str, Any]) -> str:
    async with context.db_session() as db:
        media = await media_service.get_list(db=db)
        return _dump([GetMediaDetail.model_validate(m) for m in media])


async def delete_media(context: 'AppContext', arguments: dict[str, Any]) -> str:
    pk = require_str(arguments, 'id')
    async with context.db_session() as db:
        await media_service.delete(db=db, uploads_dir=context.uploads_dir, pk=pk)
    return f'Media {pk} deleted successfully.'


SLIDE_FORMAT_HINT = (
    'Markdown with slides separated by a line containing only ---. Supports headings, lists, code blocks, '
    'mermaid diagrams, **Title:** description lists for card grids and <!-- notes --> for speaker notes.'
)

TOOLS: dict[str, Tool] = {
    tool.name: tool
    for tool in (
        Tool(
            'list_presentations',
            'List all presentations, most recently updated first',
            _schema(),
            list_presentations,
        ),
        Tool(
            'get_presentation',
            'Get a presentation by ID, including its full markdown content',
            _schema({'id': 'Presentation ID'}, ('id',)),
            get_presentation,
        ),
        Tool(
            'create_presentation',
            f'Create a new presentation. Content is {SLIDE_FORMAT_HINT}',
            _schema(
                {
                    'title': 'Presentation title',
                    'content': 'Markdown content with slides separated by ---',
                    'theme': 'Theme name (default: "default"). Use list_themes to see available themes.',
                },
                ('title',),
            ),
            create_presentation,
        ),
        Tool(
            'update_presentation',
            'Update an existing presentation (title, content, or theme). Omitted fields are left unchanged.',
            _schema(
                {
                    'id': 'Presentation ID',
                    'title': 'New title',
                    'content': 'New full markdown content (replaces existing)',
                    'theme': 'New theme name',
                },
                ('id',),
            ),
            update_presentation,
        ),
        Tool(
            'delete_presentation',
            'Delete a presentation by ID',
            _schema({'id': 'Presentation ID'}, ('id',)),
            delete_presentation,
        ),
        Tool(
            'add_slides',
            'Append new slides to the end of an existing presentation. The slides are added after a --- separator.',
            _schema(
                {'id': 'Presentation ID', 'slides': 'Markdown for the new slides, multiple slides separated by ---'},
                ('id', 'slides'),
            ),
            add_slides,
        ),
        Tool(
            'list_themes',
            'List all available presentation themes',
            _schema(),
            list_themes,
        ),
        Tool(
            'list_layout_rules',
            'List the layout rules used to auto-arrange slides, in matching order',
            _schema(),
            list_layout_rules,
        ),
        Tool(
            'match_layout',
            'Analyze rendered slide HTML and return its structural features and the layout rule that applies',
            _schema({'html': 'Rendered HTML of one slide'}, ('html',)),
            match_layout,
        ),
        Tool(
            'list_media',
            'List uploaded media files, newest first',
            _schema(),
            list_media,
        ),
        Tool(
            'delete_media',
            'Delete an uploaded media file by ID',
            _schema({'id': 'Media ID'}, ('id',)),
            delete_media,
        ),
    )
}
