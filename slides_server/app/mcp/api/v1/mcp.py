"""MCP over Server-Sent Events.

A client opens ``GET /sse``, learns its submit url from the first ``endpoint``
event, then posts JSON-RPC messages there. Replies arrive on the stream as
``message`` events.
"""

import json

from typing import Any, AsyncIterator

from fastapi import APIRouter, Query, Request
from fastapi.responses import PlainTextResponse, StreamingResponse

from slides_server.app.mcp.dispatcher import McpDispatcher
from slides_server.app.mcp.protocol import PARSE_ERROR, jsonrpc_error
from slides_server.app.mcp.session import ChannelClosedError, SessionChannel
from slides_server.common.exception import errors
from slides_server.common.log import log
from slides_server.core.conf import settings
from slides_server.core.context import AppContext, CurrentContext

router = APIRouter()

PING_COMMENT = ': ping\n\n'


def _make_event(event_type: str, data: str) -> str:
    """Create a Server-Sent Event (SSE) formatted string."""
    return f'event: {event_type}\ndata: {data}\n\n'


async def _event_stream(
    request: Request, context: AppContext, token: str, channel: SessionChannel
) -> AsyncIterator[str]:
    try:
        yield _make_event('endpoint', f'{settings.FASTAPI_MCP_PATH}/message?sessionId={token}')
        while not await request.is_disconnected():
            try:
                message = await channel.receive(timeout=settings.MCP_HEARTBEAT_SECONDS)
            except ChannelClosedError:
                break
            if message is None:
                yield PING_COMMENT
                continue
            yield _make_event('message', json.dumps(message, ensure_ascii=False))
    finally:
        await context.sessions.close(token)


@router.get(
    '/sse',
    summary='Open an MCP event stream',
    response_class=StreamingResponse,
    responses={200: {'content': {'text/event-stream': {}}}},
)
async def open_stream(request: Request, context: CurrentContext) -> StreamingResponse:
    token, channel = await context.sessions.open()
    log.info(f'MCP client connected, session {token}')
    return StreamingResponse(
        _event_stream(request, context, token, channel),
        media_type='text/event-stream',
        headers={
            'Cache-Control': 'no-cache',
            'Connection': 'keep-alive',
            'X-Accel-Buffering': 'no',
        },
    )


@router.post('/message', summary='Submit a JSON-RPC message to an open session', status_code=202)
async def submit_message(
    request: Request,
    context: CurrentContext,
    session_id: str | None = Query(None, alias='sessionId'),
) -> PlainTextResponse:
    channel = await context.sessions.get(session_id) if session_id else None
    if channel is None:
        raise errors.NotFoundError(msg='Session not found')

    body = await request.body()
    reply: dict[str, Any] | None
    try:
        payload = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        reply = jsonrpc_error(None, PARSE_ERROR, f'Parse error: {e}')
    else:
        reply = await McpDispatcher(context).dispatch(payload)

    if reply is not None:
        try:
            await channel.send(reply)
        except ChannelClosedError:
            raise errors.ServerError(msg='Session channel closed')

    return PlainTextResponse('Accepted', status_code=202)
