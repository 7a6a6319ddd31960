"""JSON-RPC method dispatch for the MCP endpoint."""

from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import SQLAlchemyError

from slides_server import __version__
from slides_server.app.mcp.protocol import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    SERVER_ERROR,
    RpcError,
    jsonrpc_error,
    jsonrpc_result,
    text_content,
)
from slides_server.app.mcp.tools import TOOLS, Tool
from slides_server.common.exception.errors import BaseExceptionError
from slides_server.common.log import log
from slides_server.core.conf import settings

if TYPE_CHECKING:
    from slides_server.core.context import AppContext

NOTIFICATION_PREFIX = 'notifications/'


class McpDispatcher:
    """Routes one decoded JSON-RPC message to its handler.

    Notifications, and any request without an id, produce no reply.
    """

    def __init__(self, context: 'AppContext', tools: dict[str, Tool] | None = None) -> None:
        self.context = context
        self.tools = TOOLS if tools is None else tools

    async def dispatch(self, payload: Any) -> dict[str, Any] | None:
        if not isinstance(payload, dict) or not isinstance(payload.get('method'), str):
            request_id = payload.get('id') if isinstance(payload, dict) else None
            return jsonrpc_error(request_id, INVALID_REQUEST, 'Invalid Request')

        method: str = payload['method']
        request_id = payload.get('id')
        params = payload.get('params') or {}

        if method.startswith(NOTIFICATION_PREFIX) or request_id is None:
            log.debug(f'MCP notification {method}')
            return None

        try:
            result = await self.handle(method, params)
        except RpcError as e:
            return jsonrpc_error(request_id, e.code, e.message, e.data)
        except BaseExceptionError as e:
            return jsonrpc_error(request_id, SERVER_ERROR, e.msg or type(e).__name__)
        except SQLAlchemyError as e:
            log.error(f'MCP {method} storage failure: {e}')
            return jsonrpc_error(request_id, SERVER_ERROR, f'Database error: {e}')
        except Exception as e:
            log.exception(f'MCP {method} failed: {e}')
            return jsonrpc_error(request_id, INTERNAL_ERROR, 'Internal error')
        return jsonrpc_result(request_id, result)

    async def handle(self, method: str, params: Any) -> Any:
        if method == 'initialize':
            return {
                'protocolVersion': settings.MCP_PROTOCOL_VERSION,
                'capabilities': {'tools': {}},
                'serverInfo': {'name': settings.MCP_SERVER_NAME, 'version': __version__},
            }
        if method == 'ping':
            return {}
        if method == 'tools/list':
            return {'tools': [tool.describe() for tool in self.tools.values()]}
        if method == 'tools/call':
            return await self.call_tool(params)
        raise RpcError(METHOD_NOT_FOUND, f'Method not found: {method}')

    async def call_tool(self, params: Any) -> dict[str, Any]:
        """
        Run a tool and wrap its text output

        :param params: ``{"name": ..., "arguments": {...}}``
        :return:
        """
        if not isinstance(params, dict):
            raise RpcError(INVALID_PARAMS, 'Invalid params')
        name = params.get('name')
        arguments = params.get('arguments') or {}
        if not isinstance(arguments, dict):
            raise RpcError(INVALID_PARAMS, 'Invalid params: arguments must be an object')

        tool = self.tools.get(name) if isinstance(name, str) else None
        if tool is None:
            raise RpcError(INVALID_PARAMS, f'Unknown tool: {name}')

        log.info(f'MCP tool call {tool.name}')
        return text_content(await tool.handler(self.context, arguments))
